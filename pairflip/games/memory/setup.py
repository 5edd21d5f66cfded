"""
Memory Match Setup - Creates the initial deck.

This module handles:
- Pairing the symbol set
- Assigning card ids in pairing order
- Shuffling with an optional seeded RNG for determinism
"""

from __future__ import annotations
import random
from typing import TypeVar

from ...engine_core.state import Card
from .cards import paired_symbols

T = TypeVar("T")


def shuffle_cards(items: list[T], rng: random.Random | None = None) -> list[T]:
    """
    Return a uniformly shuffled copy of items (Fisher-Yates).

    The input list is not modified.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def initialize_cards(rng: random.Random | None = None) -> tuple[Card, ...]:
    """
    Build a fresh, shuffled 16-card deck.

    Args:
        rng: Random source (seed it for reproducible deals)

    Returns:
        Tuple of face-down, unmatched cards in shuffled order
    """
    cards = [
        Card(card_id=index, symbol=symbol)
        for index, symbol in enumerate(paired_symbols())
    ]
    return tuple(shuffle_cards(cards, rng))
