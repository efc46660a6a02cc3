"""
Targeting components - Decide who or what a card acts on.

Targets already present on the context (supplied by a resume) short-circuit
the selection components. Auto-selection is deterministic: source order
decides, there is no randomness and no "best target" search.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

from .components import Component, ComponentKind
from .context import ExecutionContext


TargetFilter = Callable[[Any], bool]

SINGLE_TARGET_TYPES = ("player", "opponent", "threat", "card")
MULTI_TARGET_TYPES = ("players", "opponents", "threats", "cards")


@dataclass
class SingleEntityTarget(Component):
    """
    Select one entity.

    With allow_selection the pipeline suspends for the player to choose.
    Otherwise the target is picked automatically; note that the "card"
    type returns every in-play card matching the filter, not just one.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.SINGLE_ENTITY_TARGET

    target_type: str
    allow_selection: bool = True
    target_filter: TargetFilter | None = None

    def __post_init__(self):
        if self.target_type not in SINGLE_TARGET_TYPES:
            raise ValueError(f"Unknown single target type: {self.target_type}")

    def apply(self, context: ExecutionContext) -> None:
        if context.targets:
            return

        if self.allow_selection:
            context.request_targets(f"Select a {self.target_type} target for {context.card.name}.")
            return

        if self.target_type == "player":
            context.targets = [context.player]
        elif self.target_type == "opponent":
            context.targets = [context.opponents[0]] if context.opponents else []
        elif self.target_type == "threat":
            threats = context.location_threats or []
            if self.target_filter is not None:
                threats = [t for t in threats if self.target_filter(t)]
            context.targets = threats[:1]
        elif self.target_type == "card":
            if self.target_filter is not None:
                context.targets = [c for c in context.cards_in_play if self.target_filter(c)]


@dataclass
class MultiEntityTarget(Component):
    """Select up to max_targets entities from a candidate pool."""
    kind: ClassVar[ComponentKind] = ComponentKind.MULTI_ENTITY_TARGET

    target_type: str
    max_targets: int | None = None  # None means no limit
    allow_selection: bool = False
    target_filter: TargetFilter | None = None

    def __post_init__(self):
        if self.target_type not in MULTI_TARGET_TYPES:
            raise ValueError(f"Unknown multi target type: {self.target_type}")

    def candidates(self, context: ExecutionContext) -> list[Any]:
        if self.target_type == "players":
            pool = [context.player, *context.opponents]
        elif self.target_type == "opponents":
            pool = list(context.opponents)
        elif self.target_type == "threats":
            pool = list(context.location_threats or [])
        else:
            pool = list(context.cards_in_play)
        if self.target_filter is not None:
            pool = [c for c in pool if self.target_filter(c)]
        return pool

    def apply(self, context: ExecutionContext) -> None:
        if context.targets:
            return

        if self.allow_selection:
            limit = "any number of" if self.max_targets is None else f"up to {self.max_targets}"
            context.request_targets(f"Select {limit} {self.target_type} for {context.card.name}.")
            return

        pool = self.candidates(context)
        context.targets = pool if self.max_targets is None else pool[:self.max_targets]


@dataclass
class SelfTarget(Component):
    """Target the acting player."""
    kind: ClassVar[ComponentKind] = ComponentKind.SELF_TARGET

    def apply(self, context: ExecutionContext) -> None:
        context.targets = [context.player]


@dataclass
class TargetsConfirmed(Component):
    """
    Checkpoint placed after a selection component.

    Lets the pipeline continue only once targets exist.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.TARGETS_CONFIRMED

    confirmed: bool = False

    def apply(self, context: ExecutionContext) -> None:
        if not context.targets:
            context.hard_fail(f"No targets confirmed for {context.card.name}.")
            return
        context.targets_confirmed = True
        names = ", ".join(getattr(t, "name", str(t)) for t in context.targets)
        context.log(f"Targets confirmed for {context.card.name}: {names}.")
