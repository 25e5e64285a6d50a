import logging

from pixelgrid.charsets import OVERFLOW, SYMBOLS, TRANSPARENT

logger = logging.getLogger(__name__)


class SymbolAssigner:
    """Hands out symbols to palette indices in the order they are first seen.

    ``palette`` is the emitted character -> colour mapping. It starts with the
    transparent symbol mapped to ``None`` and gains one ``#rrggbb`` entry per
    assigned symbol. Once ``SYMBOLS`` runs out, new indices all map to
    ``OVERFLOW``, which never gets a palette entry.
    """

    def __init__(self, colour_of, symbols: str = SYMBOLS):
        self._colour_of = colour_of
        self._symbols = symbols
        self._next = 0
        self._assigned: dict[int, str] = {}
        self.palette: dict[str, str | None] = {TRANSPARENT: None}
        self.overflowed = False

    def __len__(self) -> int:
        return len(self._assigned)

    def symbol_for(self, index: int) -> str:
        symbol = self._assigned.get(index)
        if symbol is None:
            symbol = self._assign(index)
        return symbol

    def _assign(self, index: int) -> str:
        if self._next < len(self._symbols):
            symbol = self._symbols[self._next]
            self._next += 1
            self.palette[symbol] = self._colour_of(index)
        else:
            if not self.overflowed:
                logger.debug("Ran out of symbols at palette index %d; rendering as %r", index, OVERFLOW)
                self.overflowed = True
            symbol = OVERFLOW
        self._assigned[index] = symbol
        return symbol
