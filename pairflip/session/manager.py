"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Client creates a session -> a fresh TurnController is dealt
2. During the game:
   - Client selects cards and resets through the session's controller
   - Subscribers receive every new state
3. Session ends (client request or stale cleanup)
   -> the controller is closed, pending timers cancelled, state dropped

PERSISTENCE RULES:
- NO database
- Sessions are in-memory only and disappear with the process
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
import uuid

from .turn_controller import TurnController

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    An ephemeral game session.

    One player, one controller. The session is destroyed when it ends.
    """
    session_id: str
    controller: TurnController
    created_at: float
    last_active_at: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own controller
    - Track active sessions
    - Clean up ended and idle sessions
    """

    def __init__(
        self,
        match_delay: float | None = None,
        mismatch_delay: float | None = None,
    ):
        self._sessions: dict[str, Session] = {}
        self.match_delay = match_delay
        self.mismatch_delay = mismatch_delay

    def create_session(self, random_seed: int | None = None) -> Session:
        """
        Create a new game session.

        Args:
            random_seed: Seed for a reproducible deal

        Returns:
            New Session with a freshly dealt board
        """
        session_id = str(uuid.uuid4())
        controller = TurnController(
            random_seed=random_seed,
            match_delay=self.match_delay,
            mismatch_delay=self.mismatch_delay,
        )
        now = time.time()
        session = Session(
            session_id=session_id,
            controller=controller,
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session_id] = session
        logger.info("Session created: %s", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The controller is closed so no pending evaluation fires after
        the session is gone. Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        session.controller.close()
        logger.info("Session ended: %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: float = 3600) -> list[str]:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the IDs that were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")

        return to_remove
