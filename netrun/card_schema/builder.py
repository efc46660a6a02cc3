"""
Builder - Turns card definitions into engine cards.
"""

from __future__ import annotations
from typing import Any, Iterable

from ..engine_core.cards import Card, EnhancedCard, LegacyEffect
from ..engine_core.components import Component
from ..engine_core import costs, effects, targeting
from ..engine_core.zones import CardZone, coerce_zone, create_zone_marker
from .models import CardDefinition, TargetFilterSpec, ZoneMarkerSpec


def _predicate(spec: TargetFilterSpec | None):
    return spec.to_predicate() if spec is not None else None


def build_component(spec: Any) -> Component:
    """Build the engine component a component spec describes."""
    kind = spec.kind

    if isinstance(spec, ZoneMarkerSpec):
        zone: CardZone = coerce_zone(kind)
        return create_zone_marker(zone, spec.position)

    if kind == "SingleEntityTarget":
        return targeting.SingleEntityTarget(spec.target_type, spec.allow_selection, _predicate(spec.filter))
    if kind == "MultiEntityTarget":
        return targeting.MultiEntityTarget(
            spec.target_type, spec.max_targets, spec.allow_selection, _predicate(spec.filter),
        )
    if kind == "CancelCard":
        return effects.CancelCard(spec.target_card_index, _predicate(spec.condition))

    # Everything else maps field-for-field onto the component class of the same name
    for module in (targeting, costs, effects):
        component_class = getattr(module, kind, None)
        if component_class is not None:
            return component_class(**spec.model_dump(exclude={"kind"}))
    raise ValueError(f"No component class for {kind}")


def build_enhanced_card(definition: CardDefinition | dict[str, Any]) -> EnhancedCard:
    """Build an enhanced card template from a definition (or its raw dict)."""
    if not isinstance(definition, CardDefinition):
        definition = CardDefinition.model_validate(definition)

    return EnhancedCard(
        id=definition.id,
        name=definition.name,
        cost=definition.cost,
        faction=definition.faction.value,
        card_type=definition.card_type,
        keywords=list(definition.keywords),
        effects=[LegacyEffect(**e.model_dump()) for e in definition.effects],
        description=definition.description,
        components=[build_component(c) for c in definition.components],
    )


def build_card_library(definitions: Iterable[CardDefinition | dict[str, Any]]) -> dict[str, Card]:
    """Build every definition, keyed by card id."""
    cards = [build_enhanced_card(d) for d in definitions]
    return {card.id: card for card in cards}
