"""
Tests for game content: cards, locations and setup.
"""

import random

import pytest

from ..card_schema import validate_card_library
from ..config import EngineConfig
from ..content.cards import (
    ENHANCED_CARDS, MARKET_CARD_POOL, STARTER_IDS, get_enhanced_card, get_enhanced_starting_deck,
)
from ..content.locations import create_location_deck, draw_next_location, initialize_location_deck
from ..content.setup import initialize_game
from ..engine_core.threats import gain_threat_ap
from ..engine_core.zones import CardZone, current_zone


class TestCards:
    """Tests for the card catalog."""

    def test_catalog_is_valid(self):
        """The built-in cards pass library validation."""
        result = validate_card_library(ENHANCED_CARDS)

        assert result.valid, result.errors

    def test_starting_deck(self):
        """The starting deck is 7 Credit Chips and 3 Personal Data, all distinct instances."""
        deck = get_enhanced_starting_deck()

        assert sorted(c.id for c in deck) == ["credit_chip"] * 7 + ["personal_data"] * 3
        assert len({c.instance_id for c in deck}) == 10

    def test_market_pool_excludes_starters(self):
        """Starter cards never appear in the market pool."""
        assert MARKET_CARD_POOL
        assert not any(c.id in STARTER_IDS for c in MARKET_CARD_POOL)

    def test_lookup(self):
        """Cards are looked up by id."""
        assert get_enhanced_card("credit_chip").name == "Credit Chip"
        assert get_enhanced_card("missing") is None


class TestLocations:
    """Tests for the location deck."""

    def test_deck_order(self):
        """Runs start at an entrance and end at an exit, with an objective between."""
        deck = create_location_deck(random.Random(3), locations_between=3)

        assert deck[0].location_type == "entrance"
        assert deck[-1].is_exit
        assert any(loc.has_objective for loc in deck[1:-1])
        assert len(deck) == 6

    def test_locations_are_copies(self):
        """Damaging a threat in one run does not touch the catalog."""
        first = create_location_deck(random.Random(1))
        second = create_location_deck(random.Random(1))

        first[0].threats[0].health = 0

        assert second[0].threats[0].health > 0

    def test_draw_next_location(self):
        """Moving on deactivates the old threats and activates the new ones."""
        deck = initialize_location_deck(random.Random(5), locations_between=1)
        entrance = deck.current_location
        assert all(t.is_active for t in entrance.threats)

        arrived = draw_next_location(deck)

        assert deck.current_location is arrived
        assert deck.visited_locations == [entrance]
        assert not any(t.is_active for t in entrance.threats)
        assert all(t.is_active for t in arrived.threats)

    def test_draw_until_exit(self):
        """The last location reached is the exit, after which nothing is left."""
        deck = initialize_location_deck(random.Random(5), locations_between=1)
        while draw_next_location(deck) is not None:
            pass

        assert deck.has_reached_exit
        assert deck.has_found_objective
        assert draw_next_location(deck) is None


class TestSetup:
    """Tests for initialize_game."""

    @pytest.mark.parametrize("names", [[], ["a", "b", "c", "d", "e"]])
    def test_player_count_checked(self, names):
        """Only 1-4 players are supported."""
        with pytest.raises(ValueError):
            initialize_game(names)

    def test_initial_state(self):
        """Only the first player starts with a hand; the market is full."""
        state = initialize_game(["Alice", "Bob"], config=EngineConfig(random_seed=11))
        alice, bob = state.players

        assert (alice.id, bob.id) == ("player_0", "player_1")
        assert len(alice.hand) == 5 and len(alice.deck) == 5
        assert len(bob.hand) == 0 and len(bob.deck) == 10
        assert all(current_zone(c) == CardZone.HAND for c in alice.hand)
        assert all(current_zone(c) == CardZone.DECK for c in bob.deck)
        assert len(state.market.available_cards) == 5
        assert all(current_zone(c) == CardZone.MARKET for c in state.market.available_cards)
        assert state.location_deck.current_location.location_type == "entrance"

    def test_seed_makes_setup_repeatable(self):
        """The same seed deals the same game."""
        first = initialize_game(["Solo"], config=EngineConfig(random_seed=4))
        second = initialize_game(["Solo"], config=EngineConfig(random_seed=4))

        assert [c.id for c in first.players[0].hand] == [c.id for c in second.players[0].hand]
        assert [c.id for c in first.market.available_cards] == [c.id for c in second.market.available_cards]

    def test_threats_attack_active_player(self):
        """A threat whose card plays damages the active player."""
        state = initialize_game(["Solo"], config=EngineConfig(random_seed=2))
        threat = state.location_threats()[0]
        threat.action_potential = threat.max_action_potential

        gain_threat_ap(threat, 1)

        assert state.active_player.health == 10 - threat.attack
