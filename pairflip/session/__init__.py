"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of the game:
- Created when the player starts a game
- Holds a TurnController (board, selection, timer)
- Destroyed when the player leaves or it goes stale

Sessions are EPHEMERAL:
- No persistence to database
- Ending a session cancels its pending evaluation
"""

from .manager import SessionManager, Session
from .turn_controller import TurnController, StateListener

__all__ = [
    "SessionManager",
    "Session",
    "TurnController",
    "StateListener",
]
