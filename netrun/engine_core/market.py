"""
Market operations.

The market is refilled from a card pool with fresh instances, each tagged
with a market-zone marker. Mutates the market in place.
"""

from __future__ import annotations
from typing import Any, Sequence
import random

from .cards import Card
from .state import Market
from .zones import CardZone, move_card_to_zone


def _random_card(pool: Sequence[Card], rng: Any) -> Card:
    template = (rng or random).choice(list(pool))
    return move_card_to_zone(template.instantiate(), None, CardZone.MARKET)


def create_market(pool: Sequence[Card], size: int = 5, rng: Any = None) -> Market:
    """A market filled with size random cards from the pool."""
    market = Market(max_size=size)
    refill_market(market, pool, rng)
    return market


def remove_card(market: Market, index: int) -> Card | None:
    """Take a card out of the market (when it is bought)."""
    if 0 <= index < len(market.available_cards):
        return market.available_cards.pop(index)
    return None


def trash_card(market: Market, card: Card) -> None:
    market.trashed_cards.append(card.copy())


def refill_market(market: Market, pool: Sequence[Card], rng: Any = None) -> list[Card]:
    """Top the market back up to max_size. Returns the cards added."""
    if not pool:
        return []
    added = []
    while len(market.available_cards) < market.max_size:
        card = _random_card(pool, rng)
        market.available_cards.append(card)
        added.append(card)
    return added


def refresh_market(market: Market, pool: Sequence[Card], rng: Any = None) -> list[Card]:
    """Trash every available card and deal a whole new market."""
    market.trashed_cards.extend(market.available_cards)
    market.available_cards = []
    return refill_market(market, pool, rng)
