"""
Card Execution Service - The queue that runs enhanced cards one at a time.

Lifecycle of the queue:
- IDLE: empty queue, cursor 0
- RUNNING: cards left to run, nothing paused
- PAUSED_HARD_FAIL / PAUSED_AWAITING_TARGETS: cursor held, context retained
- back to IDLE once the cursor passes the last card

Suspension is plain state: the service returns control to its caller
whenever a card pauses, and the caller drives it again with
provide_targets() or cancel_execution().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import random
import logging

from .cards import Card
from .components import execute_card_components
from .context import ExecutionContext, ExecutionResult
from .player_ops import move_play_to_discard
from .state import GameState
from .zones import CardZone, InQueueZone, current_zone, move_card_to_zone


logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]
TargetSelectionCallback = Callable[[list[Any]], None]


class QueueStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED_HARD_FAIL = "paused_hard_fail"
    PAUSED_AWAITING_TARGETS = "paused_awaiting_targets"


@dataclass
class ExecutionQueueState:
    """Everything the service knows about the queue between calls."""
    queue: list[Card] = field(default_factory=list)
    cursor: int = 0
    is_paused: bool = False
    awaiting_target_selection: bool = False
    selected_targets: list[Any] = field(default_factory=list)
    context: ExecutionContext | None = None  # Only set while paused
    target_selection_callback: TargetSelectionCallback | None = None
    last_result: ExecutionResult | None = None


class CardExecutionService:
    """
    Runs queued cards through their component pipelines.

    The random source handed to every context can be replaced by passing
    rng (anything with randint/randrange/shuffle), which makes risky
    cards deterministic under test.
    """

    def __init__(self, rng: Any = None):
        self.rng = rng if rng is not None else random.Random()
        self._state = ExecutionQueueState()

    # ----- Queue surgery -----

    def enqueue(self, card: Card) -> Card:
        """Tag a copy of the card with its queue position and append it."""
        queued = move_card_to_zone(card, current_zone(card), CardZone.QUEUE, position=len(self._state.queue))
        self._state.queue.append(queued)
        logger.debug("Queued %s at position %d", queued.name, len(self._state.queue) - 1)
        return queued

    def remove_at(self, index: int) -> Card | None:
        if 0 <= index < len(self._state.queue):
            removed = self._state.queue.pop(index)
            self._retag_positions()
            return removed
        return None

    def reorder(self, from_index: int, to_index: int) -> None:
        queue = self._state.queue
        if 0 <= from_index < len(queue) and 0 <= to_index < len(queue):
            queue.insert(to_index, queue.pop(from_index))
            self._retag_positions()

    def _retag_positions(self) -> None:
        """Keep each queue marker's position equal to the card's slot."""
        for position, card in enumerate(self._state.queue):
            for component in card.components:
                if isinstance(component, InQueueZone):
                    component.position = position

    # ----- Driving -----

    def execute_next(self, game_state: GameState, log: LogSink) -> bool:
        """
        Run the card at the cursor.

        Returns True only when this call finished the last card in the
        queue. A pause, a finished card with more remaining, or a call
        that could not run anything all return False.
        """
        state = self._state
        if not state.queue or state.cursor >= len(state.queue) or state.is_paused:
            logger.debug(
                "Cannot execute next card (queue=%d, cursor=%d, paused=%s)",
                len(state.queue), state.cursor, state.is_paused,
            )
            return False

        card = state.queue[state.cursor]
        context = state.context
        if context is None or context.card.instance_id != card.instance_id:
            context = self._build_context(card, game_state, log)
            logger.debug("Executing %s at position %d", card.name, state.cursor)
        else:
            logger.debug("Resuming %s at component %d", card.name, context.resume_index)

        result = execute_card_components(card, context)
        state.last_result = result

        if result.is_paused:
            state.context = context
            state.is_paused = True
            state.awaiting_target_selection = context.awaiting_target_selection
            if context.awaiting_target_selection:
                log(f"Waiting for you to select targets for {card.name}...")
            else:
                log(f"Execution of {card.name} halted.")
            return False

        state.context = None
        if game_state is not None:
            move_play_to_discard(game_state.active_player, card)
        logger.debug("Finished %s", card.name)

        state.cursor += 1
        if state.cursor >= len(state.queue):
            self.reset_state()
            log("Finished executing all cards in the queue.")
            return True
        return False

    def execute_all(self, game_state: GameState, log: LogSink) -> bool:
        """Run cards until the queue empties or one of them pauses."""
        state = self._state
        complete = False
        if state.is_paused:
            logger.debug("Execution is paused, not running the queue")
            return complete

        while state.cursor < len(state.queue) and not state.is_paused:
            complete = self.execute_next(game_state, log)
            if state.is_paused and state.awaiting_target_selection:
                return False
        return complete

    def provide_targets(self, targets: list[Any], callback: TargetSelectionCallback | None = None) -> None:
        """
        Resume the paused card with the supplied targets.

        The card re-enters its pipeline at the component that suspended it.
        If it then completes, the rest of the queue runs too. A registered
        callback is called once with the targets and then dropped.
        """
        state = self._state
        context = state.context
        if context is None:
            logger.error("Cannot resume execution: no paused card is waiting for targets")
            return
        if callback is not None:
            state.target_selection_callback = callback
        pending, state.target_selection_callback = state.target_selection_callback, None

        state.selected_targets = list(targets)
        context.targets = list(targets)
        context.clear_pause()
        context.targets_confirmed = True
        context.resumed_index = context.resume_index
        state.is_paused = False
        state.awaiting_target_selection = False
        logger.debug("Targets provided for %s, resuming at position %d", context.card.name, state.cursor)

        game_state, log = context.game_state, context.log
        self.execute_next(game_state, log)
        if not state.is_paused:
            self.execute_all(game_state, log)

        if pending is not None:
            pending(targets)

    def cancel_execution(self) -> None:
        """Stop waiting on the current card. The queue and cursor are kept."""
        state = self._state
        if state.context is not None:
            state.context.clear_pause()
        state.context = None
        state.is_paused = False
        state.awaiting_target_selection = False
        state.selected_targets = []
        logger.debug("Execution canceled, %d card(s) kept at cursor %d", len(state.queue), state.cursor)

    def reset_state(self) -> None:
        """Empty the queue and forget any paused card."""
        state = self._state
        state.queue = []
        state.cursor = 0
        state.is_paused = False
        state.awaiting_target_selection = False
        state.selected_targets = []
        state.context = None
        state.target_selection_callback = None

    # ----- Queries -----

    def is_paused(self) -> bool:
        return self._state.is_paused

    def is_awaiting_target_selection(self) -> bool:
        return self._state.awaiting_target_selection

    def get_context(self) -> ExecutionContext | None:
        return self._state.context

    def get_queue(self) -> list[Card]:
        return list(self._state.queue)

    def get_cursor(self) -> int:
        return self._state.cursor

    @property
    def last_result(self) -> ExecutionResult | None:
        return self._state.last_result

    @property
    def status(self) -> QueueStatus:
        state = self._state
        if state.is_paused:
            if state.awaiting_target_selection:
                return QueueStatus.PAUSED_AWAITING_TARGETS
            return QueueStatus.PAUSED_HARD_FAIL
        if state.cursor < len(state.queue):
            return QueueStatus.RUNNING
        return QueueStatus.IDLE

    move_card_to_zone = staticmethod(move_card_to_zone)

    def _build_context(self, card: Card, game_state: GameState, log: LogSink) -> ExecutionContext:
        return ExecutionContext(
            card=card,
            player=game_state.active_player,
            opponents=game_state.opponents,
            cards_in_play=game_state.cards_in_play(),
            location_threats=game_state.location_threats(),
            game_state=game_state,
            log=log,
            queue=self._state.queue,
            queue_position=self._state.cursor,
            rng=self.rng,
        )
