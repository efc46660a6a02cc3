"""
Zone Transition Tracker - Zone markers and card moves between zones.

A zone is a label on a card instance saying where its authoritative copy
lives (market, deck, hand, queue, play, discard). The actual containment
(which list holds the card) belongs to player/market state; whoever moves
a card replaces it in its container with the instance returned here.

Invariant: a card instance carries at most one zone marker.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar
import logging

from .cards import Card, EnhancedCard, as_enhanced
from .components import Component, ComponentKind, component_tag
from .context import ExecutionContext


logger = logging.getLogger(__name__)


class CardZone(Enum):
    """Logical zones a card instance can occupy."""
    MARKET = "market"
    DECK = "deck"
    HAND = "hand"
    QUEUE = "queue"
    PLAY = "play"
    DISCARD = "discard"


@dataclass
class ZoneMarker(Component):
    """Marks the zone a card instance is in. Applying it does nothing."""
    zone: ClassVar[CardZone]

    def apply(self, context: ExecutionContext) -> None:
        return None


@dataclass
class InMarketZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_MARKET_ZONE
    zone: ClassVar[CardZone] = CardZone.MARKET


@dataclass
class InDeckZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_DECK_ZONE
    zone: ClassVar[CardZone] = CardZone.DECK


@dataclass
class InHandZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_HAND_ZONE
    zone: ClassVar[CardZone] = CardZone.HAND


@dataclass
class InQueueZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_QUEUE_ZONE
    zone: ClassVar[CardZone] = CardZone.QUEUE
    position: int | None = None


@dataclass
class InPlayZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_PLAY_ZONE
    zone: ClassVar[CardZone] = CardZone.PLAY


@dataclass
class InDiscardZone(ZoneMarker):
    kind: ClassVar[ComponentKind] = ComponentKind.IN_DISCARD_ZONE
    zone: ClassVar[CardZone] = CardZone.DISCARD


ZONE_MARKERS: dict[CardZone, type[ZoneMarker]] = {
    CardZone.MARKET: InMarketZone,
    CardZone.DECK: InDeckZone,
    CardZone.HAND: InHandZone,
    CardZone.QUEUE: InQueueZone,
    CardZone.PLAY: InPlayZone,
    CardZone.DISCARD: InDiscardZone,
}


def _zone_aliases(zone: CardZone) -> set[str]:
    name = zone.value
    return {
        f"in{name}zone",
        f"in{name}",
        f"{name}zone",
        f"zone:{name}",
        f"zone:in{name}",
    }


# Every spelling a zone marker tag has used, lowercased
ZONE_TAG_ALIASES: dict[str, CardZone] = {
    alias: zone for zone in CardZone for alias in _zone_aliases(zone)
}

CREDIT_COST_TAGS = {"creditcost", "credit_cost", "cost:credits"}


def _normalize_tag(tag: str) -> str:
    return tag.replace("_", "").replace(" ", "").lower()


def zone_of_component(component: Any) -> CardZone | None:
    """The zone a marker component stands for, or None if it is not a marker."""
    if isinstance(component, ZoneMarker):
        return component.zone
    return ZONE_TAG_ALIASES.get(_normalize_tag(component_tag(component)))


def is_zone_marker(component: Any) -> bool:
    return zone_of_component(component) is not None


def is_credit_cost(component: Any) -> bool:
    return component_tag(component).lower() in CREDIT_COST_TAGS


def coerce_zone(value: CardZone | str) -> CardZone:
    """
    Accept a CardZone or any of its names ("hand", "inHand", "zone:hand").
    """
    if isinstance(value, CardZone):
        return value
    normalized = _normalize_tag(value)
    for zone in CardZone:
        if normalized == zone.value:
            return zone
    if normalized in ZONE_TAG_ALIASES:
        return ZONE_TAG_ALIASES[normalized]
    raise ValueError(f"Unknown zone: {value}")


def current_zone(card: Card) -> CardZone | None:
    """The zone named by the card's marker, if it has one."""
    for component in getattr(card, "components", None) or []:
        zone = zone_of_component(component)
        if zone is not None:
            return zone
    return None


def zone_markers(card: Card) -> list[Any]:
    return [c for c in getattr(card, "components", None) or [] if is_zone_marker(c)]


def create_zone_marker(zone: CardZone, position: int | None = None) -> ZoneMarker:
    if zone == CardZone.QUEUE:
        return InQueueZone(position=position)
    return ZONE_MARKERS[zone]()


def move_card_to_zone(
    card: Card,
    from_zone: CardZone | str | None,
    to_zone: CardZone | str,
    position: int | None = None,
) -> EnhancedCard:
    """
    Move a card instance to a new zone.

    Returns a shallow copy carrying exactly one marker for to_zone. The
    original instance is never touched, and neither is any container;
    callers replace the old instance wherever it is held.

    Moving into the queue also strips credit costs: credits are paid when
    buying from the market, never at execution time.
    """
    target = coerce_zone(to_zone)
    moved = as_enhanced(card).copy()
    moved.components = [c for c in moved.components if not is_zone_marker(c)]
    if target == CardZone.QUEUE:
        moved.components = [c for c in moved.components if not is_credit_cost(c)]
    moved.components.append(create_zone_marker(target, position))

    source = coerce_zone(from_zone).value if from_zone is not None else "none"
    logger.debug("Moved %s (%s) from %s to %s", card.name, card.instance_id, source, target.value)
    return moved
