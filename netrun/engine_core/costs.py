"""
Cost components - What a card consumes before its effects apply.

An unpaid cost hard-fails the context: the reason is logged, the pipeline
stops, nothing already paid is refunded. TrashCost is the exception that
may also suspend for a selection when it has no card to trash yet.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar

from .cards import Card
from .components import AmountComponent, Component, ComponentKind
from .context import ExecutionContext
from .player_ops import remove_from_play
from .zones import CardZone, move_card_to_zone


REQUIREMENT_LOCATIONS = ("play", "hand", "discard")


@dataclass
class CreditCost(AmountComponent):
    """Pay credits. Only meaningful when buying; queued cards lose this component."""
    kind: ClassVar[ComponentKind] = ComponentKind.CREDIT_COST

    amount: int

    def can_apply(self, context: ExecutionContext) -> bool:
        return context.player.credits >= self.amount

    def apply(self, context: ExecutionContext) -> None:
        if not self.can_apply(context):
            context.hard_fail(f"Not enough credits to play {context.card.name}.")
            return
        context.player.credits -= self.amount
        context.log(f"Paid {self.amount} credits to play {context.card.name}.")


@dataclass
class ActionCost(AmountComponent):
    """Spend actions."""
    kind: ClassVar[ComponentKind] = ComponentKind.ACTION_COST

    amount: int = 1

    def can_apply(self, context: ExecutionContext) -> bool:
        return context.player.actions >= self.amount

    def apply(self, context: ExecutionContext) -> None:
        if not self.can_apply(context):
            context.hard_fail(f"Not enough actions to play {context.card.name}.")
            return
        context.player.actions -= self.amount
        context.log(f"Used {self.amount} action(s) to play {context.card.name}.")


@dataclass
class HealthCost(AmountComponent):
    """Pay with health. The label ("Meat", "Net", "Brain") is flavor only."""
    kind: ClassVar[ComponentKind] = ComponentKind.HEALTH_COST

    amount: int
    label: str = "Meat"

    def can_apply(self, context: ExecutionContext) -> bool:
        return context.player.health >= self.amount

    def apply(self, context: ExecutionContext) -> None:
        if not self.can_apply(context):
            context.hard_fail(
                f"Not enough health to take {self.amount} {self.label} damage for {context.card.name}."
            )
            return
        context.player.health -= self.amount
        context.log(f"Took {self.amount} {self.label} damage to play {context.card.name}.")


@dataclass
class KeywordRequirement(Component):
    """Require count cards with a keyword in play, hand or discard. Consumes nothing."""
    kind: ClassVar[ComponentKind] = ComponentKind.KEYWORD_REQUIREMENT

    keyword: str
    count: int = 1
    location: str = "play"

    def __post_init__(self):
        if self.location not in REQUIREMENT_LOCATIONS:
            raise ValueError(f"Unknown requirement location: {self.location}")

    def _pool(self, context: ExecutionContext) -> list[Card]:
        if self.location == "play":
            return context.cards_in_play
        if self.location == "hand":
            return context.player.hand
        return context.player.discard

    def apply(self, context: ExecutionContext) -> None:
        found = sum(1 for card in self._pool(context) if self.keyword in card.keywords)
        if found < self.count:
            context.hard_fail(
                f"Requirement not met: Need {self.count} {self.keyword} card(s), found {found}."
            )
            return
        context.log(f"Requirement met: Found {found} {self.keyword} card(s).")


@dataclass
class TrashCost(Component):
    """
    Trash a card in play to pay for this one.

    - target_type "self": trash the executing card
    - a card already targeted: validate it and trash it
    - otherwise: suspend and ask the player for a card to trash

    With specific=True the trashed card must also carry specific_keyword.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.TRASH_COST

    target_type: str
    specific: bool = False
    specific_keyword: str | None = None

    def apply(self, context: ExecutionContext) -> None:
        if self.target_type == "self":
            self._trash(context, context.card, refusal=(
                f"Cannot trash {context.card.name}: it is not in play."
            ))
            return

        if context.pending_selection == "trash":
            selected = context.finish_selection()
            candidate = selected[0] if selected else None
        elif context.targets and context.is_card(context.targets[0]):
            candidate = context.targets[0]
        else:
            context.begin_selection(
                "trash", f"Select a {self.target_type} card in play to trash for {context.card.name}."
            )
            return

        if candidate is None or not self.matches(candidate):
            name = getattr(candidate, "name", "nothing")
            context.hard_fail(f"Cannot trash {name}: a {self.describe()} card is required.")
            return
        self._trash(context, candidate, refusal=f"Cannot trash {candidate.name}: it is not in play.")

    def describe(self) -> str:
        if self.specific and self.specific_keyword:
            return f"{self.specific_keyword} {self.target_type}"
        return self.target_type

    def matches(self, card: Any) -> bool:
        if not isinstance(card, Card):
            return False
        if self.target_type.lower() not in ("any", "card", card.card_type.lower()):
            return False
        if self.specific and self.specific_keyword and self.specific_keyword not in card.keywords:
            return False
        return True

    def _trash(self, context: ExecutionContext, card: Card, refusal: str) -> None:
        player = context.player
        removed = remove_from_play(player, card)
        if removed is None:
            context.hard_fail(refusal)
            return
        if context.cards_in_play is not player.in_play:
            context.cards_in_play[:] = [
                c for c in context.cards_in_play if c.instance_id != card.instance_id
            ]
        player.discard.append(move_card_to_zone(removed, CardZone.PLAY, CardZone.DISCARD))
        context.recently_trashed.append(removed)
        context.log(f"Trashed {removed.name} to pay for {context.card.name}.")
