import pytest

from pixelgrid.config import DEFAULT_CONFIG, GridConfig
from pixelgrid.dimensions import resolve_dimensions
from pixelgrid.errors import DimensionError


@pytest.mark.parametrize(
    "config, expected",
    [
        (GridConfig(width=40), (40, 20)),
        (GridConfig(height=25), (50, 25)),
        (GridConfig(scale=0.5), (50, 25)),
        (GridConfig(), (32, 16)),
        (DEFAULT_CONFIG, (32, 16)),
        (GridConfig(width=40, height=40), (40, 40)),
    ],
)
def test_resolution_scenarios(config, expected):
    assert resolve_dimensions(config, 100, 50) == expected


def test_width_and_height_beat_scale():
    assert resolve_dimensions(GridConfig(width=7, height=3, scale=10.0), 100, 50) == (7, 3)


def test_width_beats_scale():
    assert resolve_dimensions(GridConfig(width=10, scale=3.0), 100, 50) == (10, 5)


def test_height_beats_scale():
    assert resolve_dimensions(GridConfig(height=10, scale=3.0), 100, 50) == (20, 10)


def test_rounds_to_nearest():
    # 33 * 10 / 100 = 3.3, 35 * 10 / 100 = 3.5
    assert resolve_dimensions(GridConfig(width=10), 100, 33) == (10, 3)
    assert resolve_dimensions(GridConfig(width=10), 100, 35) == (10, 4)


def test_extreme_aspect_clamped_to_one():
    assert resolve_dimensions(GridConfig(width=10), 1000, 1) == (10, 1)
    assert resolve_dimensions(GridConfig(height=10), 1, 1000) == (1, 10)


def test_zero_and_negative_results_clamped():
    assert resolve_dimensions(GridConfig(width=0, height=0), 100, 50) == (1, 1)
    assert resolve_dimensions(GridConfig(scale=0.0), 100, 50) == (1, 1)
    assert resolve_dimensions(GridConfig(scale=-2.0), 100, 50) == (1, 1)


def test_upscaling_is_allowed():
    assert resolve_dimensions(GridConfig(scale=3.0), 4, 2) == (12, 6)


def test_infinite_size_raises():
    with pytest.raises(DimensionError, match="not finite"):
        resolve_dimensions(GridConfig(scale=1e308), 100, 50)
    with pytest.raises(DimensionError):
        resolve_dimensions(GridConfig(width=10**308 * 10), 1, 100)
