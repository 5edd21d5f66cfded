"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to controller calls
2. Manages sessions
3. Formats state snapshots for the front-end

This layer is framework-agnostic. Calls that can start the resolution
timer (select_card) must run on the event loop.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from .schemas import (
    CardInfo,
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    GameStatus,
    SelectCardResponse,
)
from ..config import get_config
from ..engine_core.state import GameState
from ..session import SessionManager, Session


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        state = service.create_session(CreateSessionRequest(seed=7))
        result = service.select_card(state.session_id, 3)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest | None = None) -> GameStateResponse:
        """
        Create a new game session.

        Idle sessions are swept on the way in.
        """
        self.cleanup_stale_sessions()
        seed = request.seed if request else None
        session = self.session_manager.create_session(random_seed=seed)
        return self.build_game_state(session.session_id, session.controller.state)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        session.touch()
        return self.build_game_state(session_id, session.controller.state)

    def select_card(self, session_id: str, card_id: int) -> SelectCardResponse | ErrorResponse:
        """Flip a card; a rejected selection still returns the current state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        session.touch()
        accepted = session.controller.select_card(card_id)
        return SelectCardResponse(
            accepted=accepted,
            state=self.build_game_state(session_id, session.controller.state),
        )

    def reset_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        session.touch()
        session.controller.reset()
        return self.build_game_state(session_id, session.controller.state)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def subscribe(
        self,
        session_id: str,
        listener: Callable[[GameStateResponse], None],
        on_end: Callable[[], None] | None = None,
    ) -> Callable[[], None] | None:
        """
        Forward every state change of a session as a GameStateResponse.

        on_end() is called once if the session is ended or swept.

        Returns an unsubscribe function, or None if the session is unknown.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return None

        def forward(state: GameState) -> None:
            listener(self.build_game_state(session_id, state))

        return session.controller.subscribe(forward, on_close=on_end)

    def cleanup_stale_sessions(self) -> list[str]:
        return self.session_manager.cleanup_stale_sessions(get_config().session_max_age)

    def get_session(self, session_id: str) -> Session | None:
        return self.session_manager.get_session(session_id)

    # =========================================================================
    # Helper methods
    # =========================================================================

    def build_game_state(self, session_id: str, state: GameState) -> GameStateResponse:
        """Convert a GameState snapshot to the public response model."""
        return GameStateResponse(
            session_id=session_id,
            game_id=state.game_id,
            status=GameStatus(state.phase.value),
            cards=[
                CardInfo(
                    card_id=card.card_id,
                    position=position,
                    symbol=card.symbol if card.is_face_up else None,
                    is_flipped=card.is_flipped,
                    is_matched=card.is_matched,
                )
                for position, card in enumerate(state.cards)
            ],
            selection=list(state.selection),
            move_count=state.move_count,
            matched_pairs=state.matched_pairs,
            remaining_pairs=state.remaining_pairs,
            is_resolving=state.is_resolving,
            is_won=state.is_won,
        )
