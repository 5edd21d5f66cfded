"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the browser front-end and
the engine. Face-down cards never carry their symbol.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request body could not be parsed
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

API_VERSION = "v1"


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Turn state machine phase as seen by clients."""
    IDLE = "idle"
    RESOLVING = "resolving"
    WON = "won"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class WSMessageType(str, Enum):
    # Client -> Server
    PING = "ping"

    # Server -> Client
    STATE_UPDATE = "state_update"
    ERROR = "error"
    PONG = "pong"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card as rendered at one grid position."""
    card_id: int
    position: int = Field(description="Index in the 4x4 grid, row-major")
    symbol: Optional[str] = Field(None, description="Only present while the card is face up")
    is_flipped: bool = False
    is_matched: bool = False

    model_config = {"from_attributes": True}


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible deal")


class SelectCardRequest(BaseModel):
    """Request to flip a card."""
    card_id: int


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete observable game state."""
    session_id: str
    game_id: str
    status: GameStatus
    cards: list[CardInfo] = Field(default_factory=list)
    selection: list[int] = Field(default_factory=list)
    move_count: int = 0
    matched_pairs: int = 0
    remaining_pairs: int = 0
    is_resolving: bool = False
    is_won: bool = False
    api_version: str = API_VERSION


class SelectCardResponse(BaseModel):
    """Result of a selection; rejected selections leave the state unchanged."""
    accepted: bool
    state: GameStateResponse
    api_version: str = API_VERSION


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Error response returned for any 4xx or 5xx status."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
    api_version: str = API_VERSION
