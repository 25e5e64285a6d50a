from __future__ import annotations

import json
from dataclasses import dataclass, field

import numpy as np

from pixelgrid.charsets import ALPHA_THRESHOLD, TRANSPARENT
from pixelgrid.errors import SerializationError
from pixelgrid.neuquant import NeuQuant
from pixelgrid.symbols import SymbolAssigner


@dataclass
class GridResult:
    rows: list[str]  # one string per pixel row
    palette: dict[str, str | None] = field(default_factory=lambda: {TRANSPARENT: None})

    @property
    def art(self) -> str:
        return "\n".join(self.rows).rstrip()

    def to_dict(self) -> dict:
        return {"art": self.art, "palette": dict(self.palette)}

    def to_json(self) -> bytes:
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as e:
            raise SerializationError() from e


def assemble_grid(pixels: np.ndarray, quantizer: NeuQuant) -> GridResult:
    """Turn an ``(height, width, 4)`` RGBA array into rows of palette symbols.

    Opaque pixels are classified up front; symbols are then assigned in one
    row-major pass so the first colour seen always gets the first symbol.
    """
    height, width = pixels.shape[:2]
    opaque = pixels[:, :, 3] >= ALPHA_THRESHOLD
    indices = np.zeros((height, width), dtype=np.intp)
    if opaque.any():
        indices[opaque] = quantizer.classify(pixels[opaque])

    symbols = SymbolAssigner(quantizer.hex_colour)
    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            if opaque[y, x]:
                row.append(symbols.symbol_for(int(indices[y, x])))
            else:
                row.append(TRANSPARENT)
        rows.append("".join(row))
    return GridResult(rows=rows, palette=symbols.palette)
