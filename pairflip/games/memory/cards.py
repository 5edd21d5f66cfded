"""
Memory Match Card Definitions.

The deck is fixed: eight symbols, each printed on exactly two cards.
"""

SYMBOLS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII")

PAIR_COUNT = len(SYMBOLS)
DECK_SIZE = PAIR_COUNT * 2

# Grid shape used by renderers (4x4)
GRID_COLUMNS = 4


def paired_symbols() -> list[str]:
    """Symbol list duplicated in order: I..VIII, I..VIII."""
    return [*SYMBOLS, *SYMBOLS]
