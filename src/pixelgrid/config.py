import json
import logging
import math
from dataclasses import asdict, dataclass

from pixelgrid.errors import ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 32
DEFAULT_COLORS = 64
MIN_COLORS = 2
MAX_COLORS = 256


@dataclass(frozen=True)
class GridConfig:
    width: int | None = None
    height: int | None = None
    scale: float | None = None
    colors: int | None = None

    @property
    def max_colors(self) -> int:
        colors = DEFAULT_COLORS if self.colors is None else self.colors
        return min(max(colors, MIN_COLORS), MAX_COLORS)

    def to_dict(self) -> dict:
        return asdict(self)


# Substituted whenever the configuration blob cannot be parsed
DEFAULT_CONFIG = GridConfig(width=DEFAULT_WIDTH)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_dimension(data: dict, key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if not _is_int(value) or value < 0:
        raise ConfigParseError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def _check_scale(data: dict) -> float | None:
    value = data.get("scale")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigParseError(f"scale must be a finite number, got {value!r}")
    return float(value)


def _check_colors(data: dict) -> int | None:
    value = data.get("colors")
    if value is None:
        return None
    if not _is_int(value):
        raise ConfigParseError(f"colors must be an integer, got {value!r}")
    return value


def parse_config(blob: bytes | str | dict | None) -> GridConfig:
    """Parse a JSON configuration object.

    Accepts raw JSON (bytes or str) or an already-decoded dict. Unknown keys
    are ignored and ``null`` is treated as an absent field. ``None`` yields
    an empty configuration, which falls through to the default sizing rule.
    """
    if blob is None:
        return GridConfig()
    if isinstance(blob, dict):
        data = blob
    else:
        try:
            data = json.loads(blob)
        except (ValueError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Malformed configuration: {e}") from e
    if not isinstance(data, dict):
        raise ConfigParseError(f"Configuration must be a JSON object, got {type(data).__name__}")
    return GridConfig(
        width=_check_dimension(data, "width"),
        height=_check_dimension(data, "height"),
        scale=_check_scale(data),
        colors=_check_colors(data),
    )


def parse_config_or_default(blob: bytes | str | dict | None) -> GridConfig:
    try:
        return parse_config(blob)
    except ConfigParseError as e:
        logger.warning("%s; using default configuration", e)
        return DEFAULT_CONFIG
