"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. create_session() sets up a game (players, market, location deck)
2. During the game the player:
   - queues cards from hand into the play area
   - executes the queue, answering target prompts as they come
   - buys from the market and ends phases
3. Game ends (a player at 0 health) or the session is ended
4. end_session() drops the session from memory

Sessions are in-memory only. Nothing is saved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import random
import time
import uuid

from ..config import EngineConfig
from ..content.locations import draw_next_location
from ..content.setup import initialize_game, wire_threat_attacks
from ..engine_core.action import Action, ActionResult
from ..engine_core.components import ComponentKind, component_tag
from ..engine_core.execution import CardExecutionService, QueueStatus
from ..engine_core.reducer import Reducer, check_game_over
from ..engine_core.state import GamePhase, GameState
from ..engine_core.threats import grant_ap_after_execution
from .game_log import GameLog


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    WAITING_TARGETS = "waiting_targets"  # A queued card needs target selection
    HALTED = "halted"  # A queued card failed a cost or requirement
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # User quit


@dataclass
class GameSession:
    """
    One game in progress.

    Contains:
    - The game state
    - The execution service running queued cards
    - The reducer for player actions
    - The narration log
    """
    session_id: str
    created_at: float
    game_state: GameState
    service: CardExecutionService
    reducer: Reducer
    log: GameLog
    config: EngineConfig = field(default_factory=EngineConfig)
    rng: Any = None
    state: SessionState = SessionState.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state in {SessionState.ACTIVE, SessionState.WAITING_TARGETS, SessionState.HALTED}

    @property
    def pending_prompt(self) -> str | None:
        """What the player is being asked to select, if anything."""
        context = self.service.get_context()
        if context is None or not self.service.is_awaiting_target_selection():
            return None
        return context.prompt

    # ----- Player actions -----

    def apply(self, action: Action) -> ActionResult:
        """Apply a player action and narrate the outcome."""
        if self.state == SessionState.WAITING_TARGETS:
            return ActionResult.failure("Select targets first", error_code="AWAITING_TARGETS")
        result = self.reducer.apply(self.game_state, action)
        if result.success:
            self.log.extend(result.state_changes)
        else:
            self.log(result.error)
        self._update_state()
        return result

    def queue_card(self, hand_index: int) -> ActionResult:
        return self.apply(Action.queue_card(self.game_state.active_player.id, hand_index))

    def return_card(self, play_index: int) -> ActionResult:
        return self.apply(Action.return_card(self.game_state.active_player.id, play_index))

    def reorder_queue(self, from_index: int, to_index: int) -> ActionResult:
        return self.apply(Action.reorder_queue(self.game_state.active_player.id, from_index, to_index))

    def buy(self, market_index: int) -> ActionResult:
        return self.apply(Action.buy_card(self.game_state.active_player.id, market_index))

    def end_phase(self) -> ActionResult:
        """
        Advance the phase.

        Leaving the action phase drops any unfinished execution.
        """
        leaving_action = self.game_state.phase == GamePhase.ACTION
        result = self.apply(Action.end_phase(self.game_state.active_player.id))
        if result.success and leaving_action and (self.service.is_paused() or self.service.get_queue()):
            self.service.cancel_execution()
            self.service.reset_state()
            self.log("Unfinished execution was dropped.")
            self._update_state()
        return result

    def draw(self, count: int = 1) -> ActionResult:
        return self.apply(Action.draw(self.game_state.active_player.id, count))

    def move_to_next_location(self) -> bool:
        """Spend an action to move the run to the next location."""
        player = self.game_state.active_player
        deck = self.game_state.location_deck
        if deck is None or not deck.draw_pile:
            self.log("There are no more locations to move to.")
            return False
        if player.actions <= 0:
            self.log("You don't have enough actions to move to the next location.")
            return False
        player.actions -= 1
        location = draw_next_location(deck)
        self.log(f"{player.name} moves on to {location.name}.")
        return True

    # ----- Card execution -----

    def execute_queue(self) -> QueueStatus:
        """
        Run every card in the active player's play area, in order.

        Stops at the first card that needs targets or fails a cost.
        """
        player = self.game_state.active_player
        if self.state == SessionState.WAITING_TARGETS:
            self.log("Select targets for the current card first.")
            return self.service.status
        if not player.in_play:
            self.log("No cards queued for execution.")
            return self.service.status

        self.service.reset_state()
        for card in player.in_play:
            self.service.enqueue(card)
        logger.debug("Executing %d queued card(s) for %s", len(player.in_play), player.name)

        self.service.execute_all(self.game_state, self.log)
        return self._after_execution()

    def provide_targets(self, targets: list[Any]) -> QueueStatus:
        """
        Answer the target prompt of the waiting card.

        A hard-failed card cannot be resumed this way; only a PauseQueue
        halt, which waits for the player to carry on, can.
        """
        if not (self.service.is_awaiting_target_selection() or self._halted_on_pause()):
            self.log("No card is waiting for targets.")
            return self.service.status
        self.service.provide_targets(targets)
        return self._after_execution()

    def _halted_on_pause(self) -> bool:
        context = self.service.get_context()
        if context is None or not self.service.is_paused():
            return False
        components = context.card.components
        index = context.resume_index
        return index < len(components) and component_tag(components[index]) == ComponentKind.PAUSE_QUEUE.value

    def cancel(self) -> None:
        """
        Give up on the card that is waiting.

        The queue is dropped; cards that did not run stay in the play area.
        """
        self.service.cancel_execution()
        self.service.reset_state()
        self.log("Execution canceled.")
        self._update_state()

    def _after_execution(self) -> QueueStatus:
        status = self.service.status
        if status == QueueStatus.IDLE:
            played = grant_ap_after_execution(self.game_state.location_threats())
            for threat in played:
                logger.debug("%s played after execution", threat.name)
        if check_game_over(self.game_state):
            self.log("Game over!")
        self._update_state()
        return status

    def _update_state(self) -> None:
        if self.game_state.phase == GamePhase.GAME_OVER:
            self.state = SessionState.GAME_OVER
        elif self.service.is_awaiting_target_selection():
            self.state = SessionState.WAITING_TARGETS
        elif self.service.is_paused():
            self.state = SessionState.HALTED
        else:
            self.state = SessionState.ACTIVE


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        player_names: list[str],
        config: EngineConfig | None = None,
        rng: Any = None,
    ) -> GameSession:
        """
        Create a new game session.

        Args:
            player_names: Names of the players (1-4)
            config: Game parameters (the manager's config if not provided)
            rng: Random source shared by setup, draws and card execution

        Returns:
            New GameSession in the first player's action phase
        """
        config = config or self.config
        rng = rng or random.Random(config.random_seed)
        log = GameLog(limit=config.log_limit)

        game_state = initialize_game(player_names, config=config, rng=rng)
        wire_threat_attacks(game_state, log)

        session = GameSession(
            session_id=str(uuid.uuid4()),
            created_at=time.time(),
            game_state=game_state,
            service=CardExecutionService(rng=rng),
            reducer=Reducer(config=config, rng=rng),
            log=log,
            config=config,
            rng=rng,
        )
        log("Game started.")
        self._sessions[session.session_id] = session
        logger.debug("Created session %s for %d player(s)", session.session_id, len(player_names))
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> None:
        """End a session and drop it from memory."""
        session = self._sessions.pop(session_id, None)
        if session:
            if reason == "completed":
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
            session.service.reset_state()

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> None:
        """Drop finished sessions older than max_age."""
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
