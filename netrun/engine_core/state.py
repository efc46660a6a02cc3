"""
Game State - Players, threats, locations, market and the whole game.

Unlike an immutable reducer state, these objects are mutated in place:
an execution context holds direct references to players and threats and
components change them directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .cards import Card


class GamePhase(Enum):
    """Turn phases."""
    ACTION = "action"
    BUY = "buy"
    CLEANUP = "cleanup"
    WAITING = "waiting"
    GAME_OVER = "game_over"


def _neutral_reputation() -> dict[str, int]:
    return {"Corp": 50, "Runner": 50, "Street": 50}


@dataclass(eq=False)
class Player:
    """
    A player and the card containers they own.

    in_play holds the cards the player has committed to this turn
    (the queued cards waiting for execution).
    """
    id: str
    name: str
    deck: list[Card] = field(default_factory=list)
    hand: list[Card] = field(default_factory=list)
    discard: list[Card] = field(default_factory=list)
    in_play: list[Card] = field(default_factory=list)
    credits: int = 0
    actions: int = 0
    buys: int = 0
    health: int = 10
    damage_protection: int = 0
    faction_reputation: dict[str, int] = field(default_factory=_neutral_reputation)
    installed_cards: list[Card] = field(default_factory=list)
    face_down_cards: list[Card] = field(default_factory=list)
    is_human: bool = True

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0


@dataclass(eq=False)
class LocationThreat:
    """
    A hostile entity at a location.

    Action potential (AP) must only change through threats.gain_threat_ap.
    """
    id: str
    name: str
    description: str = ""
    danger_level: int = 1
    health: int = 1  # Defense value
    attack: int = 1
    faction: str = "Corp"
    damage_protection: int = 0
    action_potential: int = 0
    max_action_potential: int = 3
    is_active: bool = True
    is_dead: bool = False
    is_face_down: bool = False
    on_play: Callable[[LocationThreat], None] | None = None

    def play_card(self) -> None:
        """Trigger the threat's card play."""
        if self.on_play is not None:
            self.on_play(self)


@dataclass
class Location:
    """A location in the run with its threats and rewards."""
    id: str
    name: str
    description: str
    location_type: str  # entrance, corridor, server_room, security, exit, objective
    difficulty: str  # easy, medium, hard
    has_objective: bool = False
    is_exit: bool = False
    threats: list[LocationThreat] = field(default_factory=list)
    reward_credits: int = 0
    reward_cards: int = 0


@dataclass
class LocationDeck:
    """The run's locations: the current one, what is left and what was seen."""
    draw_pile: list[Location] = field(default_factory=list)
    current_location: Location | None = None
    visited_locations: list[Location] = field(default_factory=list)
    has_found_objective: bool = False
    has_reached_exit: bool = False


@dataclass
class Market:
    """Cards available for purchase and cards removed from the market."""
    available_cards: list[Card] = field(default_factory=list)
    trashed_cards: list[Card] = field(default_factory=list)
    max_size: int = 5


@dataclass
class GameState:
    """
    Complete game state.

    The execution engine only needs players and active_player_index; the
    rest is used by the reducer and session.
    """
    players: list[Player] = field(default_factory=list)
    active_player_index: int = 0
    market: Market = field(default_factory=Market)
    phase: GamePhase = GamePhase.ACTION
    turn_number: int = 1

    # Cards removed from the game entirely
    trash_pile: list[Card] = field(default_factory=list)

    location_deck: LocationDeck | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def active_player(self) -> Player:
        return self.players[self.active_player_index]

    @property
    def opponents(self) -> list[Player]:
        """Players other than the active one, in seat order."""
        return [p for i, p in enumerate(self.players) if i != self.active_player_index]

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def cards_in_play(self) -> list[Card]:
        """All players' in-play cards, as a new list."""
        cards: list[Card] = []
        for p in self.players:
            cards.extend(p.in_play)
        return cards

    def location_threats(self) -> list[LocationThreat]:
        """Living threats at the current location."""
        if self.location_deck is None or self.location_deck.current_location is None:
            return []
        return [t for t in self.location_deck.current_location.threats if not t.is_dead]

    def all_threats(self) -> list[LocationThreat]:
        """Living threats at every location still in the run."""
        if self.location_deck is None:
            return []
        locations = list(self.location_deck.draw_pile)
        if self.location_deck.current_location is not None:
            locations.insert(0, self.location_deck.current_location)
        return [t for loc in locations for t in loc.threats if not t.is_dead]
