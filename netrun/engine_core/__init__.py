"""
Engine Core - Component-based card execution.

The engine is the runtime that:
1. Models cards as ordered lists of components
2. Runs a card's components against an execution context
3. Queues cards and suspends for target selection
4. Tracks which zone each card instance lives in
5. Applies player actions via the reducer
"""

from .cards import Card, EnhancedCard, LegacyEffect, create_card_with_components
from .context import ExecutionContext, ExecutionResult, ExecutionStatus
from .components import Component, ComponentKind, execute_card_components
from .zones import CardZone, move_card_to_zone
from .state import GameState, GamePhase, Player, LocationThreat, Location, LocationDeck, Market
from .execution import CardExecutionService, ExecutionQueueState, QueueStatus
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, check_game_over

__all__ = [
    "Card",
    "EnhancedCard",
    "LegacyEffect",
    "create_card_with_components",
    "ExecutionContext",
    "ExecutionResult",
    "ExecutionStatus",
    "Component",
    "ComponentKind",
    "execute_card_components",
    "CardZone",
    "move_card_to_zone",
    "GameState",
    "GamePhase",
    "Player",
    "LocationThreat",
    "Location",
    "LocationDeck",
    "Market",
    "CardExecutionService",
    "ExecutionQueueState",
    "QueueStatus",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "check_game_over",
]
