"""
Player operations - Zone-aware mutations of player state.

Every move between containers goes through move_card_to_zone so that the
card's zone marker always matches the list it sits in. Operations mutate
the player in place and return what moved.
"""

from __future__ import annotations
from typing import Any, Callable
import random
import logging

from .cards import Card
from .state import Player
from .zones import CardZone, move_card_to_zone


logger = logging.getLogger(__name__)

MAX_REPUTATION = 100
REPUTATION_PER_BUY = 2


def shuffle_deck(cards: list[Card], rng: Any = None) -> list[Card]:
    """Return a shuffled copy of the cards."""
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled


def draw_cards(
    player: Player,
    count: int,
    rng: Any = None,
    on_reshuffle: Callable[[], None] | None = None,
) -> list[Card]:
    """
    Draw cards from deck to hand.

    When the deck runs out, the discard pile is shuffled into a new deck.
    Stops early when both are empty. Returns the drawn instances.
    """
    drawn: list[Card] = []
    for _ in range(count):
        if not player.deck:
            if not player.discard:
                break
            recycled = [move_card_to_zone(c, CardZone.DISCARD, CardZone.DECK) for c in player.discard]
            player.discard.clear()
            player.deck.extend(shuffle_deck(recycled, rng))
            logger.debug("%s reshuffled %d cards into their deck", player.name, len(recycled))
            if on_reshuffle is not None:
                on_reshuffle()

        card = player.deck.pop(0)
        moved = move_card_to_zone(card, CardZone.DECK, CardZone.HAND)
        player.hand.append(moved)
        drawn.append(moved)
    return drawn


def draw_hand(player: Player, hand_size: int = 5, rng: Any = None, on_reshuffle=None) -> list[Card]:
    return draw_cards(player, hand_size, rng=rng, on_reshuffle=on_reshuffle)


def discard_card(player: Player, index: int) -> Card | None:
    """Discard the card at a hand index."""
    if not 0 <= index < len(player.hand):
        return None
    card = player.hand.pop(index)
    moved = move_card_to_zone(card, CardZone.HAND, CardZone.DISCARD)
    player.discard.append(moved)
    return moved


def discard_from_hand(player: Player, card: Card) -> Card | None:
    """Discard a specific card instance from hand."""
    for index, held in enumerate(player.hand):
        if held.instance_id == card.instance_id:
            return discard_card(player, index)
    return None


def discard_hand(player: Player) -> list[Card]:
    moved = [move_card_to_zone(c, CardZone.HAND, CardZone.DISCARD) for c in player.hand]
    player.hand.clear()
    player.discard.extend(moved)
    return moved


def queue_card_from_hand(player: Player, index: int) -> Card | None:
    """Commit a hand card to the play area (the queued cards)."""
    if not 0 <= index < len(player.hand):
        return None
    card = player.hand.pop(index)
    moved = move_card_to_zone(card, CardZone.HAND, CardZone.PLAY)
    player.in_play.append(moved)
    return moved


def return_queued_card(player: Player, index: int) -> Card | None:
    """Take a card back from the play area into hand."""
    if not 0 <= index < len(player.in_play):
        return None
    card = player.in_play.pop(index)
    moved = move_card_to_zone(card, CardZone.PLAY, CardZone.HAND)
    player.hand.append(moved)
    return moved


def reorder_queued_cards(player: Player, from_index: int, to_index: int) -> bool:
    size = len(player.in_play)
    if not (0 <= from_index < size and 0 <= to_index < size):
        return False
    card = player.in_play.pop(from_index)
    player.in_play.insert(to_index, card)
    return True


def remove_from_play(player: Player, card: Card) -> Card | None:
    """Remove a card instance from the play area, without placing it anywhere."""
    for index, held in enumerate(player.in_play):
        if held.instance_id == card.instance_id:
            return player.in_play.pop(index)
    return None


def move_play_to_discard(player: Player, card: Card) -> Card | None:
    """Move a card instance from the play area to discard, if it is there."""
    removed = remove_from_play(player, card)
    if removed is None:
        return None
    moved = move_card_to_zone(removed, CardZone.PLAY, CardZone.DISCARD)
    player.discard.append(moved)
    return moved


def buy_card(player: Player, card: Card) -> Card | None:
    """
    Buy a market card.

    A fresh copy goes to the player's discard pile; the market copy is
    left for the caller to remove. Returns None if the player can't pay.
    """
    if player.credits < card.cost:
        return None
    player.credits -= card.cost
    bought = move_card_to_zone(card.instantiate(), CardZone.MARKET, CardZone.DISCARD)
    player.discard.append(bought)

    if card.faction in player.faction_reputation:
        player.faction_reputation[card.faction] = min(
            MAX_REPUTATION,
            player.faction_reputation[card.faction] + REPUTATION_PER_BUY,
        )
    return bought


def trash_card_from_hand(player: Player, index: int) -> Card | None:
    """Remove a hand card from the player's collection entirely."""
    if not 0 <= index < len(player.hand):
        return None
    return player.hand.pop(index)


def force_discard(player: Player, count: int, rng: Any = None) -> list[Card]:
    """Discard cards at random from hand."""
    source = rng or random
    discarded: list[Card] = []
    for _ in range(count):
        if not player.hand:
            break
        card = player.hand.pop(source.randrange(len(player.hand)))
        moved = move_card_to_zone(card, CardZone.HAND, CardZone.DISCARD)
        player.discard.append(moved)
        discarded.append(moved)
    return discarded


def absorb_damage(target: Any, amount: int) -> int:
    """Spend the target's damage protection against an amount. Returns what gets through."""
    protection = getattr(target, "damage_protection", 0) or 0
    absorbed = min(protection, amount)
    if absorbed:
        target.damage_protection = protection - absorbed
    return amount - absorbed


def apply_damage(player: Player, amount: int) -> int:
    """Damage a player, floored at 0 health. Returns the damage taken."""
    taken = absorb_damage(player, amount)
    player.health = max(0, player.health - taken)
    return taken


def start_turn(
    player: Player,
    hand_size: int = 5,
    actions: int = 1,
    buys: int = 1,
    rng: Any = None,
    on_reshuffle: Callable[[], None] | None = None,
) -> list[Card]:
    """Reset actions and buys, discard the old hand and draw a new one."""
    player.actions = actions
    player.buys = buys
    discard_hand(player)
    return draw_hand(player, hand_size, rng=rng, on_reshuffle=on_reshuffle)


def end_turn(player: Player) -> None:
    """Move in-play cards to discard and reset per-turn resources."""
    moved = [move_card_to_zone(c, CardZone.PLAY, CardZone.DISCARD) for c in player.in_play]
    player.in_play.clear()
    player.discard.extend(moved)
    player.credits = 0
    player.actions = 0
    player.buys = 0
