"""
Effect components - What a card does once targets and costs are settled.

Effects act on context.targets and skip targets that lack the field they
change (a threat has no credits, a player has no attack). Defeat is only
narrated here; removing defeated entities is the caller's job.

Synergy and combo components never touch another component's amount.
They register a bonus on the context, and amount-bearing effects read
effective_amount() when they apply. A bonus therefore only reaches
effects placed after the component that registers it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, ClassVar
import logging

from .cards import Card
from .components import AmountComponent, Component, ComponentKind, coerce_kind, has_component
from .context import ExecutionContext
from .player_ops import absorb_damage, discard_card, discard_from_hand, draw_cards, force_discard, move_play_to_discard
from .threats import reshuffle_hook


logger = logging.getLogger(__name__)

RISK_KINDS = ("health", "credits", "discard")
REWARD_KINDS = ("damage", "credits", "draw", "actions")
RECYCLE_KINDS = ("credits", "actions", "draw")

COMBO_BONUS_KINDS = {
    "damage": ComponentKind.DEAL_DAMAGE,
    "credits": ComponentKind.GAIN_CREDITS,
    "draw": ComponentKind.DRAW_CARDS,
    "actions": ComponentKind.GAIN_ACTION,
    "prevent": ComponentKind.PREVENT_DAMAGE,
}


def _damage(context: ExecutionContext, target: Any, amount: int) -> None:
    """Hit a target, spending its protection first. Health is not floored."""
    taken = absorb_damage(target, amount)
    target.health -= taken
    if taken < amount:
        context.log(f"{target.name}'s protection absorbed {amount - taken} damage.")
    context.log(f"{context.card.name} dealt {taken} damage to {target.name}.")
    if target.health <= 0:
        context.log(f"{target.name} was defeated!")


def _draw(context: ExecutionContext, player: Any, amount: int) -> None:
    drawn = draw_cards(player, amount, rng=context.rng, on_reshuffle=reshuffle_hook(context.game_state))
    for card in drawn:
        context.log(f"{player.name} drew {card.name}.")
    if len(drawn) < amount:
        context.log(f"{player.name} couldn't draw a card (deck empty).")


# ----- Basic effects -----

@dataclass
class GainCredits(AmountComponent):
    kind: ClassVar[ComponentKind] = ComponentKind.GAIN_CREDITS

    amount: int

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)
        for target in context.targets:
            if hasattr(target, "credits"):
                target.credits += amount
                context.log(f"{target.name} gained {amount} credits.")


@dataclass
class GainAction(AmountComponent):
    kind: ClassVar[ComponentKind] = ComponentKind.GAIN_ACTION

    amount: int = 1

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)
        for target in context.targets:
            if hasattr(target, "actions"):
                target.actions += amount
                context.log(f"{target.name} gained {amount} action(s).")


@dataclass
class DealDamage(AmountComponent):
    kind: ClassVar[ComponentKind] = ComponentKind.DEAL_DAMAGE

    amount: int

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)
        for target in context.targets:
            if hasattr(target, "health"):
                _damage(context, target, amount)


@dataclass
class PreventDamage(AmountComponent):
    """Protect targets from the next points of damage they take."""
    kind: ClassVar[ComponentKind] = ComponentKind.PREVENT_DAMAGE

    amount: int

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)
        for target in context.targets:
            target.damage_protection = (getattr(target, "damage_protection", 0) or 0) + amount
            context.log(f"{target.name} is protected from the next {amount} damage.")


@dataclass
class DrawCards(AmountComponent):
    kind: ClassVar[ComponentKind] = ComponentKind.DRAW_CARDS

    amount: int

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)
        for target in context.targets:
            if hasattr(target, "deck") and hasattr(target, "hand"):
                _draw(context, target, amount)


@dataclass
class DiscardCards(AmountComponent):
    """
    Make targets discard cards.

    - random: discard uniformly at random, immediately
    - the acting player: suspend until they pick the cards
    - anyone else: discard from the front of their hand
    """
    kind: ClassVar[ComponentKind] = ComponentKind.DISCARD_CARDS

    amount: int
    random: bool = False

    def apply(self, context: ExecutionContext) -> None:
        amount = self.effective_amount(context)

        if context.pending_selection == "discard":
            chosen = context.finish_selection()
            self._discard_chosen(context, chosen, amount)
            remaining = self._after_player(context)
        else:
            remaining = context.targets

        for target in remaining:
            if not (hasattr(target, "hand") and hasattr(target, "discard")):
                continue
            if self.random:
                for card in force_discard(target, amount, rng=context.rng):
                    context.log(f"{target.name} randomly discarded {card.name}.")
            elif target is context.player:
                context.begin_selection("discard", f"Select {amount} card(s) to discard.")
                return
            else:
                for _ in range(min(amount, len(target.hand))):
                    card = discard_card(target, 0)
                    context.log(f"{target.name} discarded {card.name}.")

    def _after_player(self, context: ExecutionContext) -> list[Any]:
        for index, target in enumerate(context.targets):
            if target is context.player:
                return context.targets[index + 1:]
        return []

    def _discard_chosen(self, context: ExecutionContext, chosen: list[Any], amount: int) -> None:
        player = context.player
        for card in chosen[:amount]:
            if isinstance(card, Card) and discard_from_hand(player, card) is not None:
                context.log(f"{player.name} discarded {card.name}.")
            else:
                context.log(f"{getattr(card, 'name', card)} is not in {player.name}'s hand.")


@dataclass
class RecycleGain(Component):
    """
    Gain value from the cards trashed earlier in this execution.

    Each trashed card is worth per_card, or its own cost when per_card
    is not set.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.RECYCLE_GAIN

    gain: str = "credits"
    per_card: int | None = None

    def __post_init__(self):
        if self.gain not in RECYCLE_KINDS:
            raise ValueError(f"Unknown recycle gain: {self.gain}")

    def apply(self, context: ExecutionContext) -> None:
        trashed = context.recently_trashed
        if not trashed:
            context.log(f"{context.card.name} found nothing trashed to recycle.")
            return

        total = sum(card.cost if self.per_card is None else self.per_card for card in trashed)
        player = context.player
        if self.gain == "credits":
            player.credits += total
            context.log(f"{player.name} recycled {len(trashed)} card(s) for {total} credits.")
        elif self.gain == "actions":
            player.actions += total
            context.log(f"{player.name} recycled {len(trashed)} card(s) for {total} action(s).")
        else:
            _draw(context, player, total)


# ----- Conditional effects -----

def _others_in_play(context: ExecutionContext) -> list[Card]:
    own_id = context.card.instance_id
    return [card for card in context.cards_in_play if card.instance_id != own_id]


@dataclass
class KeywordSynergy(Component):
    """Boost a sibling component when another card in play has a keyword."""
    kind: ClassVar[ComponentKind] = ComponentKind.KEYWORD_SYNERGY

    keyword: str
    target_component: ComponentKind | str
    bonus_amount: int

    def __post_init__(self):
        self.target_component = coerce_kind(self.target_component)

    def apply(self, context: ExecutionContext) -> None:
        if not any(self.keyword in card.keywords for card in _others_in_play(context)):
            return
        if not has_component(context.card, self.target_component):
            logger.debug("%s has no %s to boost", context.card.name, self.target_component.value)
            return
        context.add_bonus(self.target_component, self.bonus_amount)
        context.log(
            f"{context.card.name} gained +{self.bonus_amount} to {self.target_component.value} "
            f"from {self.keyword} synergy."
        )


@dataclass
class ComboEffect(Component):
    """Like KeywordSynergy, but matches on keyword or card type and names the bonus by effect."""
    kind: ClassVar[ComponentKind] = ComponentKind.COMBO_EFFECT

    keyword: str
    bonus_kind: str
    amount: int

    def __post_init__(self):
        if self.bonus_kind not in COMBO_BONUS_KINDS:
            raise ValueError(f"Unknown combo bonus: {self.bonus_kind}")

    def apply(self, context: ExecutionContext) -> None:
        wanted = self.keyword.lower()
        combo = any(
            self.keyword in card.keywords or card.card_type.lower() == wanted
            for card in _others_in_play(context)
        )
        if not combo:
            return
        target_kind = COMBO_BONUS_KINDS[self.bonus_kind]
        if not has_component(context.card, target_kind):
            return
        context.add_bonus(target_kind, self.amount)
        context.log(f"{self.keyword} combo: {context.card.name} gets +{self.amount} {self.bonus_kind}.")


@dataclass
class RiskReward(Component):
    """
    Roll 1-100: at or under chance_percent pays the reward, above it the risk.

    Rewards hit the targets (damage) or the acting player; risks always fall
    on the acting player. Synergies aimed at RiskReward add to the reward.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.RISK_REWARD

    risk_kind: str
    reward_kind: str
    chance_percent: int
    risk_amount: int
    reward_amount: int

    def __post_init__(self):
        if self.risk_kind not in RISK_KINDS:
            raise ValueError(f"Unknown risk: {self.risk_kind}")
        if self.reward_kind not in REWARD_KINDS:
            raise ValueError(f"Unknown reward: {self.reward_kind}")

    def effective_reward(self, context: ExecutionContext) -> int:
        return self.reward_amount + context.bonus_for(self.kind)

    def apply(self, context: ExecutionContext) -> None:
        roll = context.rng.randint(1, 100)
        if roll <= self.chance_percent:
            context.log(f"{context.card.name} rolled {roll} (needed {self.chance_percent} or less): success!")
            self._reward(context, self.effective_reward(context))
        else:
            context.log(f"{context.card.name} rolled {roll} (needed {self.chance_percent} or less): failure.")
            self._risk(context, self.risk_amount)

    def _reward(self, context: ExecutionContext, amount: int) -> None:
        player = context.player
        if self.reward_kind == "damage":
            for target in context.targets:
                if hasattr(target, "health"):
                    _damage(context, target, amount)
        elif self.reward_kind == "credits":
            player.credits += amount
            context.log(f"{player.name} gained {amount} credits.")
        elif self.reward_kind == "draw":
            _draw(context, player, amount)
        else:
            player.actions += amount
            context.log(f"{player.name} gained {amount} action(s).")

    def _risk(self, context: ExecutionContext, amount: int) -> None:
        player = context.player
        if self.risk_kind == "health":
            player.health -= amount
            context.log(f"{player.name} took {amount} damage from the backlash.")
            if player.health <= 0:
                context.log(f"{player.name} was defeated!")
        elif self.risk_kind == "credits":
            lost = min(amount, player.credits)
            player.credits -= lost
            context.log(f"{player.name} lost {lost} credits.")
        else:
            for card in force_discard(player, amount, rng=context.rng):
                context.log(f"{player.name} discarded {card.name}.")


# ----- Control flow -----

@dataclass
class PauseQueue(Component):
    """
    Halt the queue until the caller resumes it.

    The halt is a hard pause (no target prompt); resuming through
    provide_targets releases it and the pipeline carries on.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.PAUSE_QUEUE

    message: str = "Choose targets to continue."

    def apply(self, context: ExecutionContext) -> None:
        if context.resumed_index == context.component_index:
            context.log(f"{context.card.name} resumed.")
            return
        context.hard_fail(self.message)


@dataclass
class CancelCard(Component):
    """
    Cancel a card queued after this one.

    By queue index, by the first later card matching a condition, or, with
    neither given, by asking the player. A canceled card leaves the queue
    and, if it sits in the acting player's play area, goes to discard.
    """
    kind: ClassVar[ComponentKind] = ComponentKind.CANCEL_CARD

    target_card_index: int | None = None
    target_card_condition: Callable[[Card], bool] | None = None

    def apply(self, context: ExecutionContext) -> None:
        queue = context.queue
        if queue is None:
            context.log(f"{context.card.name} has no queue to cancel from.")
            return
        first = (context.queue_position if context.queue_position is not None else -1) + 1

        if context.pending_selection == "cancel":
            selected = context.finish_selection()
            canceled = False
            for target in selected:
                index = self._index_of(queue, target, first)
                if index is not None:
                    self._cancel(context, queue, index)
                    canceled = True
            if not canceled:
                context.log(f"{context.card.name} found nothing to cancel.")
            return

        if self.target_card_index is not None:
            if first <= self.target_card_index < len(queue):
                self._cancel(context, queue, self.target_card_index)
            else:
                context.log(f"No queued card at position {self.target_card_index} to cancel.")
            return

        if self.target_card_condition is not None:
            for index in range(first, len(queue)):
                if self.target_card_condition(queue[index]):
                    self._cancel(context, queue, index)
                    return
            context.log(f"{context.card.name} found nothing to cancel.")
            return

        if first >= len(queue):
            context.log(f"{context.card.name} found nothing to cancel.")
            return
        context.begin_selection("cancel", "Select a card in the queue to cancel.")

    @staticmethod
    def _index_of(queue: list[Card], target: Any, first: int) -> int | None:
        instance_id = getattr(target, "instance_id", None)
        for index in range(first, len(queue)):
            if queue[index].instance_id == instance_id:
                return index
        return None

    @staticmethod
    def _cancel(context: ExecutionContext, queue: list[Card], index: int) -> None:
        canceled = queue.pop(index)
        move_play_to_discard(context.player, canceled)
        context.log(f"{context.card.name} canceled {canceled.name}.")


# ----- Information -----

@dataclass
class RevealCard(Component):
    kind: ClassVar[ComponentKind] = ComponentKind.REVEAL_CARD

    def apply(self, context: ExecutionContext) -> None:
        for target in context.targets:
            if hasattr(target, "is_face_down"):
                target.is_face_down = False
                context.log(f"{context.card.name} revealed {target.name}.")


@dataclass
class ScanEntity(Component):
    kind: ClassVar[ComponentKind] = ComponentKind.SCAN_ENTITY

    reveal_full_info: bool = False

    def apply(self, context: ExecutionContext) -> None:
        for target in context.targets:
            context.log(f"{'Full' if self.reveal_full_info else 'Basic'} scan of {target.name}:")
            if hasattr(target, "health"):
                context.log(f"Health: {target.health}")
            if not self.reveal_full_info:
                continue
            if hasattr(target, "attack"):
                context.log(f"Attack: {target.attack}")
            if hasattr(target, "action_potential"):
                context.log(f"Action Potential: {target.action_potential}/{target.max_action_potential}")
            if hasattr(target, "danger_level"):
                context.log(f"Danger Level: {target.danger_level}")
