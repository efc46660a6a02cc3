"""
Execution Context - Per-attempt state threaded through a card's components.

The context holds direct references into live game state (players, the
cards-in-play list, threats); components mutate those in place. There is
no rollback: a component that hard-fails leaves earlier mutations applied.

Pause encoding:
- Hard failure: execution_paused=True, awaiting_target_selection=False
- Target selection: execution_paused=True, awaiting_target_selection=True

ExecutionResult is the explicit three-way view of the same information.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING
import random

from .cards import Card

if TYPE_CHECKING:
    from .cards import EnhancedCard


def _discard_message(message: str) -> None:
    return None


class ExecutionStatus(Enum):
    """Outcome of running a card's component pipeline."""
    COMPLETED = "completed"
    HARD_FAILED = "hard_failed"
    AWAITING_TARGETS = "awaiting_targets"


@dataclass(frozen=True)
class ExecutionResult:
    """Result of one pipeline run."""
    status: ExecutionStatus
    reason: str | None = None  # Why a hard failure happened
    prompt: str | None = None  # What the caller should ask the player

    @classmethod
    def completed(cls) -> ExecutionResult:
        return cls(status=ExecutionStatus.COMPLETED)

    @classmethod
    def hard_failed(cls, reason: str | None) -> ExecutionResult:
        return cls(status=ExecutionStatus.HARD_FAILED, reason=reason)

    @classmethod
    def awaiting_targets(cls, prompt: str | None) -> ExecutionResult:
        return cls(status=ExecutionStatus.AWAITING_TARGETS, prompt=prompt)

    @property
    def is_complete(self) -> bool:
        return self.status == ExecutionStatus.COMPLETED

    @property
    def is_paused(self) -> bool:
        return self.status != ExecutionStatus.COMPLETED


@dataclass(eq=False)
class ExecutionContext:
    """
    Mutable state for one execution attempt of one card.

    A fresh context is built per card; the same context is kept across a
    pause/resume cycle for that card.
    """
    card: EnhancedCard
    player: Any
    opponents: list[Any] = field(default_factory=list)
    targets: list[Any] = field(default_factory=list)
    cards_in_play: list[Card] = field(default_factory=list)
    location_threats: list[Any] | None = None
    game_state: Any = None
    log: Callable[[str], None] = _discard_message

    # Queue the card is executing from (for components that act on it)
    queue: list[Any] | None = None
    queue_position: int | None = None

    # Control flags
    execution_paused: bool = False
    awaiting_target_selection: bool = False
    targets_confirmed: bool = False

    # Cards trashed to pay costs during this attempt
    recently_trashed: list[Card] = field(default_factory=list)

    # Random source; replace with a stub for deterministic tests
    rng: Any = field(default_factory=random.Random)

    # Per-execution amount bonuses keyed by component kind
    bonuses: dict[Any, int] = field(default_factory=dict)

    # Pipeline position
    component_index: int = 0
    resume_index: int = 0
    resumed_index: int | None = None  # Component released by the last resume

    # Why the pipeline halted
    pause_reason: str | None = None
    prompt: str | None = None

    # Selection started by a non-targeting component (discard, trash, cancel)
    pending_selection: str | None = None
    stashed_targets: list[Any] | None = None

    def hard_fail(self, reason: str) -> None:
        """Halt the pipeline for an unmet precondition."""
        self.log(reason)
        self.pause_reason = reason
        self.execution_paused = True
        self.awaiting_target_selection = False

    def request_targets(self, prompt: str) -> None:
        """Halt the pipeline until the caller supplies targets."""
        self.log(prompt)
        self.prompt = prompt
        self.execution_paused = True
        self.awaiting_target_selection = True

    def clear_pause(self) -> None:
        self.execution_paused = False
        self.awaiting_target_selection = False
        self.pause_reason = None
        self.prompt = None

    def begin_selection(self, purpose: str, prompt: str) -> None:
        """
        Ask for a selection on behalf of a non-targeting component.

        The current targets are stashed so that the components after the
        selecting one still see them once the selection is consumed.
        """
        self.pending_selection = purpose
        self.stashed_targets = list(self.targets)
        self.request_targets(prompt)

    def finish_selection(self) -> list[Any]:
        """Consume the supplied selection and restore the stashed targets."""
        selected = list(self.targets)
        self.targets = self.stashed_targets if self.stashed_targets is not None else []
        self.pending_selection = None
        self.stashed_targets = None
        return selected

    def add_bonus(self, kind: Any, amount: int) -> None:
        self.bonuses[kind] = self.bonuses.get(kind, 0) + amount

    def bonus_for(self, kind: Any) -> int:
        return self.bonuses.get(kind, 0)

    def result(self) -> ExecutionResult:
        """Current state of the pipeline as an ExecutionResult."""
        if not self.execution_paused:
            return ExecutionResult.completed()
        if self.awaiting_target_selection:
            return ExecutionResult.awaiting_targets(self.prompt)
        return ExecutionResult.hard_failed(self.pause_reason)

    @staticmethod
    def is_card(target: Any) -> bool:
        return isinstance(target, Card)
