"""
Tests for the reducer (player actions outside card execution).

Tests:
- Action application
- Phase rules
- Validation
- Game over
"""

import pytest

from ..config import EngineConfig
from ..content.setup import initialize_game
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer, check_game_over
from ..engine_core.state import GamePhase
from ..engine_core.zones import CardZone, current_zone


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(random_seed=7)


@pytest.fixture
def state(config):
    return initialize_game(["Alice", "Bob"], config=config)


@pytest.fixture
def reducer(config) -> Reducer:
    return Reducer(config=config)


class TestQueueActions:
    """Tests for moving cards into the play area."""

    def test_queue_card(self, state, reducer):
        """Queueing moves a hand card into play without spending an action."""
        alice = state.active_player
        card = alice.hand[0]

        result = reducer.apply(state, Action.queue_card(alice.id, 0))

        assert result.success
        assert result.card.instance_id == card.instance_id
        assert len(alice.hand) == 4
        assert current_zone(alice.in_play[0]) == CardZone.PLAY
        assert alice.actions == 1

    def test_queue_without_actions_fails(self, state, reducer):
        """A player with no actions left cannot queue."""
        state.active_player.actions = 0

        result = reducer.apply(state, Action.queue_card(state.active_player.id, 0))

        assert not result.success
        assert result.error_code == "NO_ACTIONS"

    def test_queue_bad_index_fails(self, state, reducer):
        """Out-of-range hand indexes are rejected."""
        result = reducer.apply(state, Action.queue_card(state.active_player.id, 9))

        assert not result.success
        assert result.error_code == "INVALID_INDEX"

    def test_return_and_reorder(self, state, reducer):
        """Queued cards can be reordered and taken back."""
        alice = state.active_player
        reducer.apply(state, Action.queue_card(alice.id, 0))
        reducer.apply(state, Action.queue_card(alice.id, 0))
        first, second = alice.in_play

        assert reducer.apply(state, Action.reorder_queue(alice.id, 0, 1)).success
        assert alice.in_play == [second, first]

        assert reducer.apply(state, Action.return_card(alice.id, 0)).success
        assert alice.in_play == [first]
        assert len(alice.hand) == 4

    def test_wrong_player_fails(self, state, reducer):
        """Acting out of turn fails."""
        result = reducer.apply(state, Action.queue_card("player_1", 0))

        assert not result.success
        assert "turn" in result.error.lower()

    def test_queue_outside_action_phase_fails(self, state, reducer):
        """Cards can only be queued in the action phase."""
        state.phase = GamePhase.BUY

        result = reducer.apply(state, Action.queue_card(state.active_player.id, 0))

        assert not result.success
        assert result.error_code == "INVALID_ACTION"


class TestBuyAction:
    """Tests for buying from the market."""

    def test_buy_card(self, state, reducer):
        """Buying pays, removes the market card and adds it to discard."""
        alice = state.active_player
        alice.credits = 100
        market_card = state.market.available_cards[0]
        market_size = len(state.market.available_cards)

        result = reducer.apply(state, Action.buy_card(alice.id, 0))

        assert result.success
        assert alice.credits == 100 - market_card.cost
        assert len(state.market.available_cards) == market_size - 1
        assert alice.discard[-1].id == market_card.id
        assert current_zone(alice.discard[-1]) == CardZone.DISCARD

    def test_buy_without_credits_fails(self, state, reducer):
        """A card the player cannot afford is refused."""
        alice = state.active_player
        alice.credits = 0
        state.market.available_cards[0].cost = 3

        result = reducer.apply(state, Action.buy_card(alice.id, 0))

        assert not result.success
        assert result.error_code == "INSUFFICIENT_CREDITS"
        assert "Not enough credits" in result.error


class TestPhases:
    """Tests for the phase machine."""

    def test_action_to_buy(self, state, reducer):
        """Ending the action phase enters the buy phase."""
        result = reducer.apply(state, Action.end_phase(state.active_player.id))

        assert result.success
        assert state.phase == GamePhase.BUY

    def test_buy_ends_turn(self, state, reducer):
        """Ending the buy phase hands the turn to the next player."""
        alice, bob = state.players
        reducer.apply(state, Action.end_phase(alice.id))
        reducer.apply(state, Action.end_phase(alice.id))

        assert state.active_player is bob
        assert state.phase == GamePhase.ACTION
        assert len(bob.hand) == 5
        assert bob.actions == 1
        assert alice.credits == 0

    def test_turn_number_increments_on_wrap(self, state, reducer):
        """A new round starts once every player has had a turn."""
        for _ in range(2):
            player_id = state.active_player.id
            reducer.apply(state, Action.end_phase(player_id))
            reducer.apply(state, Action.end_phase(player_id))

        assert state.active_player_index == 0
        assert state.turn_number == 2

    def test_draw_action(self, state, reducer):
        """DRAW draws from the deck."""
        alice = state.active_player

        result = reducer.apply(state, Action.draw(alice.id, 2))

        assert result.success
        assert len(alice.hand) == 7


class TestGameOver:
    """Tests for the end of the game."""

    def test_game_over_when_health_reaches_zero(self, state, reducer):
        """A defeated player ends the game and blocks further actions."""
        state.players[1].health = 0

        result = reducer.apply(state, Action.end_phase(state.active_player.id))

        assert state.phase == GamePhase.GAME_OVER
        assert "Game over!" in result.state_changes

        blocked = reducer.apply(state, Action.end_phase(state.active_player.id))
        assert not blocked.success

    def test_check_game_over_only_once(self, state):
        """check_game_over reports the transition a single time."""
        state.players[0].health = 0

        assert check_game_over(state)
        assert not check_game_over(state)
