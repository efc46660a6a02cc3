"""
Reducer - Applies player actions to game state.

Everything a player does outside card execution goes through
Reducer.apply(): queueing cards, buying from the market, drawing and
moving through the turn phases.

Design principles:
- Validates before applying
- Returns ActionResult with success/failure, never raises
- Mutates the game state in place (the execution engine holds live
  references into it)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from ..config import EngineConfig
from .action import Action, ActionType, ActionResult
from .market import remove_card
from .player_ops import (
    buy_card, draw_cards, end_turn, queue_card_from_hand,
    reorder_queued_cards, return_queued_card, start_turn,
)
from .state import GameState, GamePhase
from .threats import reshuffle_hook


logger = logging.getLogger(__name__)

PHASED_ACTIONS = {
    ActionType.QUEUE_CARD: {GamePhase.ACTION},
    ActionType.RETURN_CARD: {GamePhase.ACTION},
    ActionType.REORDER_QUEUE: {GamePhase.ACTION},
    ActionType.BUY_CARD: {GamePhase.ACTION, GamePhase.BUY},
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Holds no game state of its own; config and rng shape turn starts and
    draws.
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    rng: Any = None

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the state or an error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        if result.success:
            self._check_game_over(state, result)
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current state.

        Returns error message if invalid, None if valid.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed"

        if not state.players:
            return "Game has no players"

        if action.payload.player_id != state.active_player.id:
            return f"Not {action.payload.player_id}'s turn"

        allowed = PHASED_ACTIONS.get(action.action_type)
        if allowed is not None and state.phase not in allowed:
            return f"Cannot {action.action_type.value.replace('_', ' ')} during the {state.phase.value} phase"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.QUEUE_CARD: self._handle_queue_card,
            ActionType.RETURN_CARD: self._handle_return_card,
            ActionType.REORDER_QUEUE: self._handle_reorder_queue,
            ActionType.BUY_CARD: self._handle_buy_card,
            ActionType.DRAW: self._handle_draw,
            ActionType.END_PHASE: self._handle_end_phase,
        }
        return handlers.get(action_type)

    def _handle_queue_card(self, state: GameState, action: Action) -> ActionResult:
        """Commit a hand card to the play area. Actions are checked, not spent."""
        player = state.active_player
        index = action.payload.card_index
        if player.actions <= 0:
            return ActionResult.failure("No actions remaining this turn", error_code="NO_ACTIONS")
        if index is None or not 0 <= index < len(player.hand):
            return ActionResult.failure("Invalid card selection", error_code="INVALID_INDEX")

        card = queue_card_from_hand(player, index)
        return ActionResult.success_with_state(
            state, changes=[f"{player.name} queued {card.name}."], card=card,
        )

    def _handle_return_card(self, state: GameState, action: Action) -> ActionResult:
        player = state.active_player
        card = return_queued_card(player, action.payload.card_index if action.payload.card_index is not None else -1)
        if card is None:
            return ActionResult.failure("Invalid queued card", error_code="INVALID_INDEX")
        return ActionResult.success_with_state(
            state, changes=[f"{player.name} returned {card.name} to hand."], card=card,
        )

    def _handle_reorder_queue(self, state: GameState, action: Action) -> ActionResult:
        player = state.active_player
        from_index, to_index = action.payload.from_index, action.payload.to_index
        if from_index is None or to_index is None:
            return ActionResult.failure("Reorder needs both indexes", error_code="INVALID_INDEX")
        if not reorder_queued_cards(player, from_index, to_index):
            return ActionResult.failure("Invalid queue positions", error_code="INVALID_INDEX")
        return ActionResult.success_with_state(state, changes=[f"{player.name} reordered their queue."])

    def _handle_buy_card(self, state: GameState, action: Action) -> ActionResult:
        """Buy from the market. Any number of buys is allowed while credits last."""
        player = state.active_player
        market = state.market
        index = action.payload.card_index
        if index is None or not 0 <= index < len(market.available_cards):
            return ActionResult.failure("Cannot buy card: Invalid card selection.", error_code="INVALID_INDEX")

        card = market.available_cards[index]
        if player.credits < card.cost:
            return ActionResult.failure(
                f"Cannot buy {card.name}: Not enough credits "
                f"(cost: {card.cost}, available: {player.credits}).",
                error_code="INSUFFICIENT_CREDITS",
            )

        bought = buy_card(player, card)
        remove_card(market, index)
        return ActionResult.success_with_state(
            state,
            changes=[f"{player.name} bought {card.name} for {card.cost} credits. Card added to discard pile."],
            card=bought,
        )

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        player = state.active_player
        count = action.payload.count if action.payload.count is not None else 1
        drawn = draw_cards(player, count, rng=self.rng, on_reshuffle=reshuffle_hook(state))
        if not drawn and count > 0:
            return ActionResult.failure("No cards left to draw", error_code="EMPTY_DECK")
        return ActionResult.success_with_state(
            state, changes=[f"{player.name} drew {len(drawn)} card(s)."],
        )

    def _handle_end_phase(self, state: GameState, action: Action) -> ActionResult:
        """
        Advance the phase.

        action -> buy -> cleanup, and cleanup immediately hands the turn to
        the next player in their action phase.
        """
        player = state.active_player
        changes: list[str] = []

        if state.phase == GamePhase.ACTION:
            state.phase = GamePhase.BUY
            changes.append(f"{player.name} enters buy phase.")
        elif state.phase == GamePhase.BUY:
            state.phase = GamePhase.CLEANUP
            end_turn(player)
            changes.append(f"{player.name} ends their turn.")

            state.active_player_index = (state.active_player_index + 1) % len(state.players)
            if state.active_player_index == 0:
                state.turn_number += 1
                changes.append(f"Turn {state.turn_number} begins.")

            next_player = state.active_player
            start_turn(
                next_player,
                hand_size=self.config.hand_size,
                actions=self.config.starting_actions,
                buys=self.config.starting_buys,
                rng=self.rng,
                on_reshuffle=reshuffle_hook(state),
            )
            changes.append(f"{next_player.name}'s turn begins.")
            state.phase = GamePhase.ACTION

        logger.debug("Phase is now %s (turn %d)", state.phase.value, state.turn_number)
        return ActionResult.success_with_state(state, changes=changes)

    def _check_game_over(self, state: GameState, result: ActionResult) -> None:
        if check_game_over(state):
            result.state_changes.append("Game over!")


def check_game_over(state: GameState) -> bool:
    """Move the game to GAME_OVER once any player is at 0 health."""
    if state.phase != GamePhase.GAME_OVER and any(p.health <= 0 for p in state.players):
        state.phase = GamePhase.GAME_OVER
        logger.debug("Game over on turn %d", state.turn_number)
        return True
    return False
