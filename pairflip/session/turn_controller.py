"""
Turn Controller - Owns one game and drives its turn state machine.

The controller:
1. Deals the board (at startup and on reset)
2. Accepts card selections from the presentation layer
3. Schedules the deferred evaluation once two cards are up
4. Applies the outcome when the timer fires
5. Publishes each new state to subscribers

Timing:
- Exactly one evaluation can be pending (single timer slot)
- Matches resolve after match_delay, mismatches after mismatch_delay
- While an evaluation is pending, selections are absorbed (no queuing)
- reset() and close() cancel the pending evaluation

All methods must be called from the event loop thread, and the second
selection of a turn needs a running loop to arm the timer. Invalid
selections are never raised to the caller; select_card() returns False.
"""

from __future__ import annotations
import asyncio
import logging
import random
import uuid
from typing import Callable

from ..config import get_config
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, GamePhase
from ..games.memory.setup import initialize_cards

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


def _new_game_id() -> str:
    return str(uuid.uuid4())


class TurnController:
    """
    Single-player memory-match controller.

    Usage:
        controller = TurnController(random_seed=42)
        controller.select_card(3)
        controller.select_card(11)   # schedules evaluation
        await controller.wait_until_idle()
        controller.state.move_count  # -> 1
    """

    def __init__(
        self,
        random_seed: int | None = None,
        match_delay: float | None = None,
        mismatch_delay: float | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        config = get_config()
        self.match_delay = config.match_delay if match_delay is None else match_delay
        self.mismatch_delay = config.mismatch_delay if mismatch_delay is None else mismatch_delay

        self._random_seed = random_seed
        self._rng = random.Random(random_seed)
        self._reducer = Reducer()
        self._loop = loop

        # Single timer slot; the token invalidates callbacks that lost a race with reset
        self._pending: asyncio.TimerHandle | None = None
        self._token = 0
        self._idle = asyncio.Event()
        self._idle.set()

        self._listeners: list[StateListener] = []
        self._close_callbacks: list[Callable[[], None]] = []
        self._closed = False

        self._state = GameState(
            game_id=_new_game_id(),
            cards=initialize_cards(self._rng),
            random_seed=random_seed,
        )

    # =========================================================================
    # Observable state
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Current immutable snapshot."""
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def pending(self) -> bool:
        """Whether a deferred evaluation is scheduled."""
        return self._pending is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(
        self,
        listener: StateListener,
        on_close: Callable[[], None] | None = None,
    ) -> Callable[[], None]:
        """
        Call listener(state) after every accepted change, and on_close()
        once when the controller is closed.

        Returns a function that removes both.
        """
        self._listeners.append(listener)
        if on_close is not None:
            self._close_callbacks.append(on_close)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
            if on_close in self._close_callbacks:
                self._close_callbacks.remove(on_close)

        return unsubscribe

    async def wait_until_idle(self) -> None:
        """Return once no evaluation is pending."""
        await self._idle.wait()

    # =========================================================================
    # Operations
    # =========================================================================

    def select_card(self, card_id: int) -> bool:
        """
        Flip a card as part of the current turn.

        Returns True if the selection was accepted. Selections while
        resolving, of face-up or unknown cards, or after the game is
        won are ignored.
        """
        if self._closed:
            logger.debug("Selection of card %s ignored: controller closed", card_id)
            return False

        result = self._reducer.apply(self._state, Action.select_card(card_id))
        if not result.success:
            logger.debug("Selection of card %s ignored: %s", card_id, result.error_code)
            return False

        # The second card needs a loop for the timer; look it up before committing
        loop = None
        if result.new_state.is_resolving:
            loop = self._loop or asyncio.get_running_loop()

        self._commit(result)
        if loop is not None:
            self._schedule_resolution(loop)
        return True

    def reset(self) -> None:
        """
        Deal a fresh board and zero the move counter.

        Valid from any state. A pending evaluation is cancelled first so
        it can never touch the new board.
        """
        self._cancel_pending()
        cards = initialize_cards(self._rng)
        result = self._reducer.apply(
            self._state,
            Action.reset(cards, game_id=_new_game_id(), random_seed=self._random_seed),
        )
        self._commit(result)
        logger.info("Game reset: %s", self._state.game_id)

    def close(self) -> None:
        """Cancel any pending evaluation and notify close callbacks; listeners are dropped."""
        if self._closed:
            return
        self._cancel_pending()
        self._closed = True
        callbacks = list(self._close_callbacks)
        self._listeners.clear()
        self._close_callbacks.clear()
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Close callback failed")

    # =========================================================================
    # Deferred evaluation
    # =========================================================================

    def _schedule_resolution(self, loop: asyncio.AbstractEventLoop) -> None:
        """Arm the single timer slot for the current pair."""
        delay = self.match_delay if self._state.selection_is_match() else self.mismatch_delay
        self._token += 1
        self._idle.clear()
        self._pending = loop.call_later(delay, self._resolve_pending, self._token)
        logger.debug("Turn resolving in %.2fs (selection %s)", delay, self._state.selection)

    def _resolve_pending(self, token: int) -> None:
        """Timer callback: apply the outcome of the pending pair."""
        if token != self._token or self._pending is None:
            return
        self._pending = None

        result = self._reducer.apply(self._state, Action.resolve_turn())
        if result.success:
            self._commit(result)
            logger.debug("Turn resolved: %s", "; ".join(result.state_changes))
            if self._state.is_won:
                logger.info(
                    "Game %s won in %d moves", self._state.game_id, self._state.move_count
                )
        else:
            logger.warning("Turn resolution rejected: %s", result.error)
        self._idle.set()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            logger.debug("Pending evaluation cancelled")
        self._token += 1
        self._idle.set()

    def _commit(self, result: ActionResult) -> None:
        self._state = result.new_state
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed")
