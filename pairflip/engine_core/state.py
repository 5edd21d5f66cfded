"""
Game State - Immutable snapshot of one memory-match game.

Design principles:
- Immutable-friendly: all mutations return new state
- Serializable: plain values only, safe to hand to a renderer
- Observable: the controller publishes each new snapshot
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class GamePhase(Enum):
    """Turn state machine phases."""
    IDLE = "idle"  # 0 or 1 card selected, accepting input
    RESOLVING = "resolving"  # 2 cards selected, evaluation pending
    WON = "won"  # All pairs matched


@dataclass(frozen=True)
class Card:
    """
    A card on the board.

    card_id is the ordinal assigned at deal time (0..15), not the
    board position.
    """
    card_id: int
    symbol: str
    is_flipped: bool = False
    is_matched: bool = False

    @property
    def is_face_up(self) -> bool:
        return self.is_flipped or self.is_matched

    def flip_up(self) -> Card:
        """Return the card turned face up."""
        return Card(self.card_id, self.symbol, is_flipped=True, is_matched=self.is_matched)

    def flip_down(self) -> Card:
        """Return the card turned face down."""
        return Card(self.card_id, self.symbol, is_flipped=False, is_matched=self.is_matched)

    def mark_matched(self) -> Card:
        """Return the card permanently revealed."""
        return Card(self.card_id, self.symbol, is_flipped=True, is_matched=True)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str

    cards: tuple[Card, ...] = ()

    # Card ids face up and not yet resolved (at most 2)
    selection: tuple[int, ...] = ()

    move_count: int = 0
    is_resolving: bool = False
    is_won: bool = False

    random_seed: int | None = None

    @property
    def phase(self) -> GamePhase:
        if self.is_won:
            return GamePhase.WON
        if self.is_resolving:
            return GamePhase.RESOLVING
        return GamePhase.IDLE

    @property
    def matched_pairs(self) -> int:
        return sum(1 for c in self.cards if c.is_matched) // 2

    @property
    def remaining_pairs(self) -> int:
        return len(self.cards) // 2 - self.matched_pairs

    @property
    def all_matched(self) -> bool:
        return bool(self.cards) and all(c.is_matched for c in self.cards)

    def get_card(self, card_id: int) -> Card | None:
        """Get card by id."""
        for c in self.cards:
            if c.card_id == card_id:
                return c
        return None

    def selected_cards(self) -> list[Card]:
        """Cards referenced by the selection, in selection order."""
        return [c for c in (self.get_card(cid) for cid in self.selection) if c is not None]

    def selection_is_match(self) -> bool:
        """Whether the two selected cards form a pair."""
        if len(self.selection) != 2:
            return False
        first, second = self.selected_cards()
        return first.card_id != second.card_id and first.symbol == second.symbol

    def with_cards(self, updated: dict[int, Card]) -> GameState:
        """Return new state with some cards replaced (by card_id)."""
        new_cards = tuple(updated.get(c.card_id, c) for c in self.cards)
        return self._copy_with(cards=new_cards)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            cards=kwargs.get("cards", self.cards),
            selection=kwargs.get("selection", self.selection),
            move_count=kwargs.get("move_count", self.move_count),
            is_resolving=kwargs.get("is_resolving", self.is_resolving),
            is_won=kwargs.get("is_won", self.is_won),
            random_seed=kwargs.get("random_seed", self.random_seed),
        )
