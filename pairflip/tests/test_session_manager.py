"""
Tests for session management.
"""

import asyncio
import time

from ..session import SessionManager


class TestSessionLifecycle:
    """Tests for creating and ending sessions."""

    def test_create_session(self):
        manager = SessionManager()
        session = manager.create_session(random_seed=1)

        assert manager.get_session(session.session_id) is session
        assert session.controller.state.move_count == 0

    def test_sessions_are_independent(self):
        manager = SessionManager()
        first = manager.create_session()
        second = manager.create_session()

        assert first.session_id != second.session_id
        assert first.controller is not second.controller

    def test_seed_passed_to_controller(self):
        manager = SessionManager()
        first = manager.create_session(random_seed=9)
        second = manager.create_session(random_seed=9)
        assert first.controller.state.cards == second.controller.state.cards

    def test_delays_passed_to_controller(self):
        manager = SessionManager(match_delay=0.05, mismatch_delay=0.07)
        controller = manager.create_session().controller
        assert controller.match_delay == 0.05
        assert controller.mismatch_delay == 0.07

    def test_get_unknown_session(self):
        assert SessionManager().get_session("missing") is None

    def test_end_session(self):
        manager = SessionManager()
        session = manager.create_session()

        assert manager.end_session(session.session_id)
        assert session.controller.closed
        assert manager.get_session(session.session_id) is None

    def test_end_session_notifies_subscribers(self):
        manager = SessionManager()
        session = manager.create_session()
        ended = []
        session.controller.subscribe(lambda state: None, on_close=lambda: ended.append(True))

        assert manager.end_session(session.session_id, reason="user_ended")
        assert ended == [True]

    def test_end_unknown_session(self):
        assert not SessionManager().end_session("missing")

    def test_end_session_cancels_pending_turn(self):
        async def scenario():
            manager = SessionManager(match_delay=0.01, mismatch_delay=0.01)
            session = manager.create_session()
            session.controller.select_card(0)
            session.controller.select_card(1)

            manager.end_session(session.session_id)
            await asyncio.sleep(0.05)
            assert session.controller.state.move_count == 0

        asyncio.run(scenario())

    def test_list_active_sessions(self):
        manager = SessionManager()
        first = manager.create_session()
        second = manager.create_session()
        manager.end_session(first.session_id)

        assert manager.list_active_sessions() == [second.session_id]


class TestStaleCleanup:
    """Tests for idle session sweeping."""

    def test_stale_sessions_removed(self):
        manager = SessionManager()
        stale = manager.create_session()
        fresh = manager.create_session()
        stale.last_active_at = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [stale.session_id]
        assert manager.get_session(stale.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh
        assert stale.controller.closed

    def test_touch_keeps_session_alive(self):
        manager = SessionManager()
        session = manager.create_session()
        session.last_active_at = time.time() - 7200
        session.touch()

        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == []
