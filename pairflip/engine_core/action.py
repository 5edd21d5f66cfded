"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (select a card)
2. Timer callbacks (resolve the pending turn)
3. Session control (reset with a fresh deck)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    SELECT_CARD = "select_card"
    RESOLVE_TURN = "resolve_turn"
    RESET = "reset"


class RejectionCode(str, Enum):
    """Why an action was absorbed without changing state."""
    RESOLVING = "RESOLVING"
    SELECTION_FULL = "SELECTION_FULL"
    GAME_WON = "GAME_WON"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    CARD_FLIPPED = "CARD_FLIPPED"
    CARD_MATCHED = "CARD_MATCHED"
    NOTHING_TO_RESOLVE = "NOTHING_TO_RESOLVE"
    NO_HANDLER = "NO_HANDLER"
    HANDLER_ERROR = "HANDLER_ERROR"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the reducer.
    """
    card_id: int | None = None

    # For reset: the freshly dealt deck and its game id
    cards: tuple[Any, ...] | None = None
    game_id: str | None = None
    random_seed: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def select_card(cls, card_id: int) -> Action:
        """Factory for card selection."""
        return cls(
            action_type=ActionType.SELECT_CARD,
            payload=ActionPayload(card_id=card_id),
        )

    @classmethod
    def resolve_turn(cls) -> Action:
        """Factory for the deferred turn evaluation."""
        return cls(action_type=ActionType.RESOLVE_TURN)

    @classmethod
    def reset(
        cls,
        cards: tuple[Any, ...],
        game_id: str | None = None,
        random_seed: int | None = None,
    ) -> Action:
        """Factory for reset with a freshly dealt deck."""
        return cls(
            action_type=ActionType.RESET,
            payload=ActionPayload(cards=cards, game_id=game_id, random_seed=random_seed),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Rejection reason (if absorbed)
    - Human-readable changes (for logs and UI)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    # Set by RESOLVE_TURN
    is_match: bool | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        is_match: bool | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            is_match=is_match,
        )
