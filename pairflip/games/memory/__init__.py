"""
Memory Match - the built-in game.

Sixteen face-down cards, eight pairs. Flip two per turn; pairs stay
revealed, mismatches turn back over. Find every pair to win.

This module contains:
- The fixed symbol set
- Deck creation and shuffling
"""

from .cards import SYMBOLS, PAIR_COUNT, DECK_SIZE, GRID_COLUMNS, paired_symbols
from .setup import initialize_cards, shuffle_cards

__all__ = [
    "SYMBOLS",
    "PAIR_COUNT",
    "DECK_SIZE",
    "GRID_COLUMNS",
    "paired_symbols",
    "initialize_cards",
    "shuffle_cards",
]
