"""
Action System - Actions, payloads, and results.

Actions represent what a player asks the game to do outside of card
execution:
1. Queue management (queue, return, reorder cards in play)
2. Market purchases
3. Phase control (end phase, draw)

Card effects themselves run through the execution service, not here.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    QUEUE_CARD = "queue_card"
    RETURN_CARD = "return_card"
    REORDER_QUEUE = "reorder_queue"
    BUY_CARD = "buy_card"
    DRAW = "draw"
    END_PHASE = "end_phase"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    Different action types use different fields; validation happens in
    the reducer.
    """
    player_id: str | None = None

    # Index into hand, play area or market
    card_index: int | None = None

    # For reordering
    from_index: int | None = None
    to_index: int | None = None

    # For draws
    count: int | None = None

    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload
    timestamp: float | None = None

    @classmethod
    def queue_card(cls, player_id: str, card_index: int) -> Action:
        return cls(
            action_type=ActionType.QUEUE_CARD,
            payload=ActionPayload(player_id=player_id, card_index=card_index),
        )

    @classmethod
    def return_card(cls, player_id: str, card_index: int) -> Action:
        return cls(
            action_type=ActionType.RETURN_CARD,
            payload=ActionPayload(player_id=player_id, card_index=card_index),
        )

    @classmethod
    def reorder_queue(cls, player_id: str, from_index: int, to_index: int) -> Action:
        return cls(
            action_type=ActionType.REORDER_QUEUE,
            payload=ActionPayload(player_id=player_id, from_index=from_index, to_index=to_index),
        )

    @classmethod
    def buy_card(cls, player_id: str, card_index: int) -> Action:
        return cls(
            action_type=ActionType.BUY_CARD,
            payload=ActionPayload(player_id=player_id, card_index=card_index),
        )

    @classmethod
    def draw(cls, player_id: str, count: int = 1) -> Action:
        return cls(
            action_type=ActionType.DRAW,
            payload=ActionPayload(player_id=player_id, count=count),
        )

    @classmethod
    def end_phase(cls, player_id: str) -> Action:
        return cls(
            action_type=ActionType.END_PHASE,
            payload=ActionPayload(player_id=player_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - The game state (mutated in place on success)
    - The error (if failed)
    - Human-readable changes for the game log
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    # The card the action moved, if any
    card: Any | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        card: Any | None = None,
    ) -> ActionResult:
        """Create a success result with the updated state."""
        return cls(success=True, new_state=state, state_changes=changes or [], card=card)
