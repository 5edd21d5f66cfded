"""
API Module - Browser front-end interface.

Exposes the engine via REST and WebSocket. The front-end:
1. Creates a game session
2. Selects cards and renders the returned state
3. Receives resolved turns over the WebSocket (or polls)
4. Resets or ends the session

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectCardRequest,
    # Responses
    GameStateResponse,
    SelectCardResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    GameStatus,
    ErrorCode,
    WSMessageType,
)
from .service import APIService

__all__ = [
    "CreateSessionRequest",
    "SelectCardRequest",
    "GameStateResponse",
    "SelectCardResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    "CardInfo",
    "GameStatus",
    "ErrorCode",
    "WSMessageType",
    "APIService",
]
