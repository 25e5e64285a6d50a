import io
import json
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from pixelgrid.charsets import OVERFLOW, TRANSPARENT
from pixelgrid.config import GridConfig, parse_config_or_default
from pixelgrid.dimensions import resolve_dimensions
from pixelgrid.errors import DecodeError, DegenerateImageError, DimensionError, GridError
from pixelgrid.grid import GridResult, assemble_grid
from pixelgrid.neuquant import DEFAULT_SAMPLE_FACTOR, NeuQuant

logger = logging.getLogger(__name__)


def decode_image(data: bytes | str | Path) -> Image.Image:
    """Decode image bytes (or a file) into RGBA. Only the first frame is used."""
    source = io.BytesIO(data) if isinstance(data, (bytes, bytearray, memoryview)) else data
    try:
        with Image.open(source) as image:
            return image.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError() from e


def resize_image(image: Image.Image, width: int, height: int) -> Image.Image:
    try:
        return image.resize((width, height), Image.LANCZOS)
    except (ValueError, OverflowError, MemoryError) as e:
        raise DimensionError(f"Cannot resize to {width}x{height}") from e


def image_to_grid(
    image: Image.Image | bytes | str | Path,
    config: GridConfig | dict | bytes | str | None = None,
    sample_factor: int = DEFAULT_SAMPLE_FACTOR,
) -> GridResult:
    if not isinstance(config, GridConfig):
        config = parse_config_or_default(config)
    if isinstance(image, Image.Image):
        image = image.convert("RGBA")
    else:
        image = decode_image(image)

    if image.width == 0 or image.height == 0:
        raise DegenerateImageError()

    width, height = resolve_dimensions(config, image.width, image.height)
    logger.debug("Resizing %dx%d to %dx%d", image.width, image.height, width, height)
    pixels = np.asarray(resize_image(image, width, height), dtype=np.uint8)

    quantizer = NeuQuant(config.max_colors, pixels, sample_factor=sample_factor)
    logger.debug("Learned %d colours (max %d)", len(quantizer), config.max_colors)
    return assemble_grid(pixels, quantizer)


def _error(message: str) -> bytes:
    return json.dumps({"error": message}).encode("utf-8")


def render_json(image_bytes: bytes, config_bytes: bytes | None) -> bytes:
    """Host entry point: image and JSON config in, JSON result out.

    Never raises for bad input; failures come back as ``{"error": "..."}``.
    """
    config = parse_config_or_default(config_bytes)
    try:
        return image_to_grid(image_bytes, config).to_json()
    except GridError as e:
        logger.info("Conversion failed: %s", e)
        return _error(str(e))


def format_colour(result: GridResult) -> str:
    """Wrap each symbol in an ANSI truecolor foreground sequence from its palette colour."""
    out = []
    for line in result.art.split("\n"):
        parts = []
        for char in line:
            colour = result.palette.get(char)
            if char in (TRANSPARENT, OVERFLOW) or colour is None:
                parts.append(char)
                continue
            r, g, b = int(colour[1:3], 16), int(colour[3:5], 16), int(colour[5:7], 16)
            parts.append(f"\033[38;2;{r};{g};{b}m{char}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)
