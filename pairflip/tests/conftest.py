"""
Pytest fixtures for Pairflip tests.
"""

import pytest

from ..engine_core.state import GameState, Card
from ..games.memory.cards import paired_symbols, PAIR_COUNT


def ordered_cards() -> tuple[Card, ...]:
    """Unshuffled deck: card k and card k + 8 share a symbol."""
    return tuple(
        Card(card_id=index, symbol=symbol)
        for index, symbol in enumerate(paired_symbols())
    )


def partner_of(card_id: int) -> int:
    """The other card of the same pair in a deck dealt from paired_symbols()."""
    return (card_id + PAIR_COUNT) % (2 * PAIR_COUNT)


@pytest.fixture
def fresh_state() -> GameState:
    """A new game on an unshuffled board."""
    return GameState(game_id="test_game", cards=ordered_cards())


@pytest.fixture
def one_pair_left(fresh_state: GameState) -> GameState:
    """Every pair matched except the pair of card 7 and card 15."""
    updated = {
        card.card_id: card.mark_matched()
        for card in fresh_state.cards
        if card.card_id not in (7, 15)
    }
    return fresh_state.with_cards(updated)._copy_with(move_count=7)


@pytest.fixture
def fast_delays() -> dict:
    """Short timer delays so controller tests finish quickly."""
    return {"match_delay": 0.01, "mismatch_delay": 0.02}
