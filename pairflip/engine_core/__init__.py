"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Holds an immutable GameState
2. Applies actions via the reducer
3. Reports absorbed actions as failed ActionResults
"""

from .state import GameState, GamePhase, Card
from .action import Action, ActionType, ActionPayload, ActionResult, RejectionCode
from .reducer import Reducer, apply_action

__all__ = [
    "GameState",
    "GamePhase",
    "Card",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "RejectionCode",
    "Reducer",
    "apply_action",
]
