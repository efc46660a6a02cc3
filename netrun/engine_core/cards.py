"""
Card Model - Static card definitions and runtime card instances.

A Card is template data: identity, cost, faction, type, keywords and the
legacy effect descriptors. An EnhancedCard adds an ordered component list.

Instances are identified by instance_id. Copies made for zone transitions
keep the instance_id (same logical card); instantiating a template into a
player's collection mints a new one.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from .components import Component


FACTIONS = ("Corp", "Runner", "Street", "Neutral")


def new_instance_id(card_id: str) -> str:
    """Mint a unique instance ID for a card."""
    return f"{card_id}_{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True)
class LegacyEffect:
    """
    A pre-component effect descriptor (amount + kind).

    Kept as card data only; nothing in the engine interprets it.
    """
    kind: str  # "gain_credits", "draw_cards", "damage_opponent", ...
    amount: int
    synergy_keyword: str | None = None
    synergy_bonus: int = 0


@dataclass(eq=False)
class Card:
    """A card definition or a runtime copy of one."""
    id: str
    name: str
    cost: int = 0
    faction: str = "Neutral"
    card_type: str = "Resource"
    keywords: list[str] = field(default_factory=list)
    effects: list[LegacyEffect] = field(default_factory=list)
    description: str = ""
    is_face_down: bool = False
    instance_id: str = ""

    def __post_init__(self):
        if not self.instance_id:
            self.instance_id = new_instance_id(self.id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.instance_id == other.instance_id

    def __hash__(self):
        return hash(self.instance_id)

    def has_keyword(self, keyword: str) -> bool:
        return keyword in self.keywords

    def copy(self) -> Card:
        """Shallow copy that keeps the instance identity."""
        return replace(self, keywords=list(self.keywords), effects=list(self.effects))

    def instantiate(self) -> Card:
        """Copy the template as a brand new card instance."""
        return replace(
            self,
            keywords=list(self.keywords),
            effects=list(self.effects),
            instance_id=new_instance_id(self.id),
        )


@dataclass(eq=False)
class EnhancedCard(Card):
    """
    A card plus its ordered component list.

    Component order is significant: components run strictly in list order
    and later components may depend on state established by earlier ones.
    """
    components: list[Component] = field(default_factory=list)

    def copy(self) -> EnhancedCard:
        return replace(
            self,
            keywords=list(self.keywords),
            effects=list(self.effects),
            components=list(self.components),
        )

    def instantiate(self) -> EnhancedCard:
        return replace(
            self,
            keywords=list(self.keywords),
            effects=list(self.effects),
            components=list(self.components),
            instance_id=new_instance_id(self.id),
        )


def create_card_with_components(base_card: Card, components: list[Component]) -> EnhancedCard:
    """Build an enhanced card from a base card and its components."""
    return EnhancedCard(
        id=base_card.id,
        name=base_card.name,
        cost=base_card.cost,
        faction=base_card.faction,
        card_type=base_card.card_type,
        keywords=list(base_card.keywords),
        effects=list(base_card.effects),
        description=base_card.description,
        is_face_down=base_card.is_face_down,
        components=list(components),
    )


def as_enhanced(card: Card) -> EnhancedCard:
    """Return the card as an EnhancedCard, wrapping plain cards with no components."""
    if isinstance(card, EnhancedCard):
        return card
    enhanced = create_card_with_components(card, [])
    enhanced.instance_id = card.instance_id
    return enhanced


def is_enhanced_card(card: Any) -> bool:
    return isinstance(card, EnhancedCard)
