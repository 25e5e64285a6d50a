import math

from pixelgrid.config import DEFAULT_WIDTH, GridConfig
from pixelgrid.errors import DimensionError


def _scaled(size: int, numerator: float, denominator: float = 1) -> int:
    """Round ``size * numerator / denominator`` half away from zero (0.5 -> 1, 2.5 -> 3)."""
    try:
        value = size * numerator / denominator
    except OverflowError as e:
        raise DimensionError("Output dimension too large") from e
    if not math.isfinite(value):
        raise DimensionError(f"Output dimension is not finite: {value}")
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def resolve_dimensions(config: GridConfig, orig_width: int, orig_height: int) -> tuple[int, int]:
    """Work out the output grid size for a source image.

    Explicit width and height win, then a single dimension (keeping the
    source aspect ratio), then ``scale``, then a default width of 32 columns.
    Both results are at least 1.
    """
    if config.width is not None and config.height is not None:
        width, height = config.width, config.height
    elif config.width is not None:
        width = config.width
        height = _scaled(orig_height, config.width, orig_width)
    elif config.height is not None:
        width = _scaled(orig_width, config.height, orig_height)
        height = config.height
    elif config.scale is not None:
        width = _scaled(orig_width, config.scale)
        height = _scaled(orig_height, config.scale)
    else:
        width = DEFAULT_WIDTH
        height = _scaled(orig_height, DEFAULT_WIDTH, orig_width)

    return max(width, 1), max(height, 1)
