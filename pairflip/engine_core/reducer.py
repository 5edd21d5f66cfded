"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Never schedules anything; timing belongs to the turn controller
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState
from .action import Action, ActionType, ActionResult, RejectionCode


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state, or a failure describing
        why the action was absorbed. The input state is never modified.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            message, code = rejection
            return ActionResult.failure(message, error_code=code.value)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=RejectionCode.NO_HANDLER.value,
            )

        try:
            result = handler(state, action)
        except Exception as e:
            return ActionResult.failure(str(e), error_code=RejectionCode.HANDLER_ERROR.value)

        return result

    def _validate_action(
        self, state: GameState, action: Action
    ) -> tuple[str, RejectionCode] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, code) if it must be absorbed, None if valid.
        """
        if action.action_type == ActionType.RESET:
            return None

        if action.action_type == ActionType.RESOLVE_TURN:
            if len(state.selection) != 2:
                return "No pair awaiting resolution", RejectionCode.NOTHING_TO_RESOLVE
            return None

        # SELECT_CARD
        if state.is_won:
            return "Game is over - reset to play again", RejectionCode.GAME_WON
        if state.is_resolving:
            return "Turn is resolving", RejectionCode.RESOLVING
        if len(state.selection) >= 2:
            return "Two cards already selected", RejectionCode.SELECTION_FULL

        card = state.get_card(action.payload.card_id)
        if card is None:
            return f"Card {action.payload.card_id} not found", RejectionCode.CARD_NOT_FOUND
        if card.is_matched:
            return f"Card {card.card_id} already matched", RejectionCode.CARD_MATCHED
        if card.is_flipped:
            return f"Card {card.card_id} already face up", RejectionCode.CARD_FLIPPED

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_CARD: self._handle_select_card,
            ActionType.RESOLVE_TURN: self._handle_resolve_turn,
            ActionType.RESET: self._handle_reset,
        }
        return handlers.get(action_type)

    def _handle_select_card(self, state: GameState, action: Action) -> ActionResult:
        """Turn a card face up and add it to the selection."""
        card = state.get_card(action.payload.card_id)
        selection = (*state.selection, card.card_id)
        assert len(set(selection)) == len(selection), "selection holds a duplicate card"

        new_state = state.with_cards({card.card_id: card.flip_up()})
        new_state = new_state._copy_with(
            selection=selection,
            is_resolving=len(selection) == 2,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Flipped card {card.card_id} ({card.symbol})"],
        )

    def _handle_resolve_turn(self, state: GameState, action: Action) -> ActionResult:
        """Apply the outcome of the pending pair and count the move."""
        first, second = state.selected_cards()
        is_match = state.selection_is_match()

        if is_match:
            updated = {first.card_id: first.mark_matched(), second.card_id: second.mark_matched()}
            change = f"Matched {first.symbol} (cards {first.card_id} and {second.card_id})"
        else:
            updated = {first.card_id: first.flip_down(), second.card_id: second.flip_down()}
            change = f"No match: {first.symbol} / {second.symbol}"

        new_state = state.with_cards(updated)
        new_state = new_state._copy_with(
            selection=(),
            move_count=state.move_count + 1,
            is_resolving=False,
        )

        changes = [change]
        if is_match and new_state.all_matched:
            new_state = new_state._copy_with(is_won=True)
            changes.append(f"All pairs found in {new_state.move_count} moves")

        return ActionResult.success_with_state(new_state, changes=changes, is_match=is_match)

    def _handle_reset(self, state: GameState, action: Action) -> ActionResult:
        """Start over with the dealt deck in the payload."""
        payload = action.payload
        new_state = GameState(
            game_id=payload.game_id or state.game_id,
            cards=tuple(payload.cards or ()),
            random_seed=payload.random_seed,
        )
        return ActionResult.success_with_state(new_state, changes=["New game dealt"])


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
