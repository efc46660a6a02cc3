"""
Pytest fixtures for Netrun tests.
"""

import pytest

from ..engine_core.cards import Card, EnhancedCard
from ..engine_core.context import ExecutionContext
from ..engine_core.execution import CardExecutionService
from ..engine_core.state import GameState, Location, LocationDeck, LocationThreat, Player
from ..session.game_log import GameLog


class StubRng:
    """
    Deterministic stand-in for random.Random.

    randint always returns roll, randrange always picks the first slot and
    shuffle leaves the order alone.
    """

    def __init__(self, roll: int = 1):
        self.roll = roll

    def randint(self, a, b):
        return self.roll

    def randrange(self, stop):
        return 0

    def random(self):
        return 0.0

    def shuffle(self, items):
        return None

    def choice(self, items):
        return items[0]


@pytest.fixture
def stub_rng():
    """Factory for stub random sources with a fixed roll."""
    return StubRng


@pytest.fixture
def make_card():
    """Factory for enhanced cards with the given components."""
    def _make(name="Test Card", components=None, **kwargs):
        return EnhancedCard(
            id=kwargs.pop("id", name.lower().replace(" ", "_")),
            name=name,
            components=list(components or []),
            **kwargs,
        )
    return _make


@pytest.fixture
def player() -> Player:
    return Player(id="player_0", name="Runner", credits=0, actions=1, buys=1, health=10)


@pytest.fixture
def opponent() -> Player:
    return Player(id="player_1", name="Rival", credits=0, actions=0, health=10, is_human=False)


@pytest.fixture
def threat() -> LocationThreat:
    return LocationThreat(
        id="threat-test-drone",
        name="Patrol Drone",
        health=4,
        attack=2,
        danger_level=2,
    )


@pytest.fixture
def game_state(player, opponent, threat) -> GameState:
    """Two players at a location guarded by one threat."""
    location = Location(
        id="loc-test",
        name="Test Lobby",
        description="A quiet lobby.",
        location_type="corridor",
        difficulty="easy",
        threats=[threat],
    )
    return GameState(
        players=[player, opponent],
        location_deck=LocationDeck(current_location=location),
    )


@pytest.fixture
def log() -> GameLog:
    return GameLog()


@pytest.fixture
def service(stub_rng) -> CardExecutionService:
    return CardExecutionService(rng=stub_rng(1))


@pytest.fixture
def make_context(player, opponent, threat, log, stub_rng):
    """Factory for an execution context around a card, without a queue."""
    def _make(card, **kwargs):
        kwargs.setdefault("opponents", [opponent])
        kwargs.setdefault("location_threats", [threat])
        kwargs.setdefault("cards_in_play", player.in_play)
        kwargs.setdefault("rng", stub_rng(1))
        return ExecutionContext(card=card, player=player, log=log, **kwargs)
    return _make


@pytest.fixture
def program_card() -> Card:
    return EnhancedCard(id="test_program", name="Test Program", cost=3, card_type="Program", keywords=["Virus"])
