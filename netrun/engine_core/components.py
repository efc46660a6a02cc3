"""
Component Protocol - The unit of card behavior.

Every component exposes apply(context). Components run strictly in the
order they appear on the card. A component that cannot satisfy its
precondition logs a reason and hard-fails the context; a component that
needs player input requests targets. Either way the pipeline stops at
that component.

Concrete components live in:
- targeting.py: who or what the card acts on
- costs.py: what the card consumes
- effects.py: what the card does
- zones.py: where the card instance lives
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Iterable, TYPE_CHECKING
import logging

from .context import ExecutionContext, ExecutionResult

if TYPE_CHECKING:
    from .cards import Card


logger = logging.getLogger(__name__)


class ComponentKind(Enum):
    """Discriminant tag for every component variant."""
    # Targeting
    SINGLE_ENTITY_TARGET = "SingleEntityTarget"
    MULTI_ENTITY_TARGET = "MultiEntityTarget"
    SELF_TARGET = "SelfTarget"
    TARGETS_CONFIRMED = "TargetsConfirmed"

    # Costs and requirements
    CREDIT_COST = "CreditCost"
    ACTION_COST = "ActionCost"
    HEALTH_COST = "HealthCost"
    TRASH_COST = "TrashCost"
    KEYWORD_REQUIREMENT = "KeywordRequirement"

    # Effects
    GAIN_CREDITS = "GainCredits"
    DEAL_DAMAGE = "DealDamage"
    PREVENT_DAMAGE = "PreventDamage"
    DRAW_CARDS = "DrawCards"
    DISCARD_CARDS = "DiscardCards"
    GAIN_ACTION = "GainAction"
    RECYCLE_GAIN = "RecycleGain"
    KEYWORD_SYNERGY = "KeywordSynergy"
    RISK_REWARD = "RiskReward"
    COMBO_EFFECT = "ComboEffect"

    # Control flow
    PAUSE_QUEUE = "PauseQueue"
    CANCEL_CARD = "CancelCard"

    # Information
    REVEAL_CARD = "RevealCard"
    SCAN_ENTITY = "ScanEntity"

    # Zone markers
    IN_MARKET_ZONE = "InMarketZone"
    IN_DECK_ZONE = "InDeckZone"
    IN_HAND_ZONE = "InHandZone"
    IN_QUEUE_ZONE = "InQueueZone"
    IN_PLAY_ZONE = "InPlayZone"
    IN_DISCARD_ZONE = "InDiscardZone"


class Component(ABC):
    """Base class for all card components."""
    kind: ClassVar[ComponentKind]

    @abstractmethod
    def apply(self, context: ExecutionContext) -> None:
        """Apply this component to the context."""


class AmountComponent(Component):
    """
    A component with a numeric amount that synergies can boost.

    The stored amount is never changed; bonuses registered on the context
    for this component's kind are added at apply time.
    """
    amount: int

    def effective_amount(self, context: ExecutionContext) -> int:
        return self.amount + context.bonus_for(self.kind)


def component_tag(component: Any) -> str:
    """
    Get the tag of a component.

    Works for engine components (their kind) and for foreign objects that
    only carry a "type" or "kind" string.
    """
    kind = getattr(component, "kind", None)
    if isinstance(kind, ComponentKind):
        return kind.value
    if isinstance(kind, str):
        return kind
    tag = getattr(component, "type", None)
    if isinstance(tag, str):
        return tag
    return type(component).__name__


def coerce_kind(value: ComponentKind | str) -> ComponentKind:
    """Turn a kind name ("DealDamage") or enum member into a ComponentKind."""
    if isinstance(value, ComponentKind):
        return value
    try:
        return ComponentKind(value)
    except ValueError:
        pass
    try:
        return ComponentKind[value]
    except KeyError:
        raise ValueError(f"Unknown component kind: {value}") from None


def find_components(card: Card, kind: ComponentKind) -> list[Component]:
    components: Iterable[Component] = getattr(card, "components", None) or []
    return [c for c in components if component_tag(c) == kind.value]


def has_component(card: Card, kind: ComponentKind) -> bool:
    return bool(find_components(card, kind))


def execute_card_components(card: Card, context: ExecutionContext) -> ExecutionResult:
    """
    Run a card's components in order against the context.

    Starts at context.resume_index (0 for a fresh attempt, the suspending
    component after a resume) and stops at the first component that
    pauses the context. Components before the resume point are never
    applied twice.
    """
    from .zones import is_zone_marker

    components = getattr(card, "components", None) or []
    if not [c for c in components if not is_zone_marker(c)]:
        context.log(f"{card.name} has no components to execute.")
        return ExecutionResult.completed()

    logger.debug(
        "Running %s from component %d of %d",
        card.name, context.resume_index, len(components),
    )

    for index in range(context.resume_index, len(components)):
        if context.execution_paused:
            break
        context.component_index = index
        components[index].apply(context)
        if context.execution_paused:
            context.resume_index = index
            logger.debug(
                "%s paused at %s (awaiting targets: %s)",
                card.name, component_tag(components[index]), context.awaiting_target_selection,
            )
            return context.result()

    if context.execution_paused:
        return context.result()

    context.resume_index = len(components)
    return ExecutionResult.completed()
