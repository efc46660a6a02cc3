"""
Locations - The places a run passes through and the threats guarding them.

A location deck always starts at an entrance, ends at an exit and holds
exactly one objective somewhere in between. Only the threats at the
current location are active.
"""

from __future__ import annotations
from typing import Any
import copy
import random

from ..engine_core.state import Location, LocationDeck, LocationThreat


def _threat(id: str, name: str, description: str, danger_level: int, health: int, attack: int) -> LocationThreat:
    return LocationThreat(
        id=id,
        name=name,
        description=description,
        danger_level=danger_level,
        health=health,
        attack=attack,
        is_active=False,
    )


LOCATIONS: list[Location] = [
    Location(
        id="loc-001",
        name="Main Entrance",
        description="The heavily monitored front entrance to the corporate complex.",
        location_type="entrance",
        difficulty="easy",
        threats=[
            _threat("threat-security-scanner", "Security Scanner",
                    "A biometric scanner checks all who enter.", 1, 2, 1),
        ],
        reward_credits=1,
        reward_cards=1,
    ),
    Location(
        id="loc-002",
        name="Server Farm",
        description="Rows of humming servers. The data you need is somewhere in here.",
        location_type="server_room",
        difficulty="medium",
        has_objective=True,
        threats=[
            _threat("threat-automated-defense-system", "Automated Defense System",
                    "Motion sensors trigger counter-intrusion measures.", 3, 4, 2),
            _threat("threat-security-ai", "Security AI",
                    "An artificial intelligence monitors the server farm.", 2, 3, 2),
        ],
        reward_credits=3,
        reward_cards=2,
    ),
    Location(
        id="loc-003",
        name="Back Alley",
        description="A seldom-used service exit.",
        location_type="exit",
        difficulty="easy",
        is_exit=True,
        threats=[
            _threat("threat-guard-patrol", "Guard Patrol",
                    "Security guards occasionally check this exit.", 2, 2, 1),
        ],
        reward_credits=2,
        reward_cards=1,
    ),
    Location(
        id="loc-004",
        name="Research Lab",
        description="Experimental tech and valuable prototypes are developed here.",
        location_type="objective",
        difficulty="hard",
        has_objective=True,
        threats=[
            _threat("threat-elite-security-team", "Elite Security Team",
                    "Heavily armed guards protect the valuables.", 4, 5, 3),
            _threat("threat-advanced-alarm-system", "Advanced Alarm System",
                    "State-of-the-art alarms will trigger reinforcements.", 3, 4, 2),
        ],
        reward_credits=5,
        reward_cards=3,
    ),
    Location(
        id="loc-005",
        name="Corporate Corridor",
        description="A long hallway connecting departments of the megacorp.",
        location_type="corridor",
        difficulty="medium",
        threats=[
            _threat("threat-security-cameras", "Security Cameras",
                    "Rotating cameras monitor all movement.", 2, 3, 2),
        ],
        reward_credits=2,
        reward_cards=1,
    ),
    Location(
        id="loc-006",
        name="Security Center",
        description="The heart of the building's defense systems.",
        location_type="security",
        difficulty="hard",
        threats=[
            _threat("threat-security-chief", "Security Chief",
                    "A veteran security professional with cybernetic enhancements.", 5, 6, 2),
            _threat("threat-alarm-console", "Alarm Console",
                    "This console can lock down the entire building.", 3, 4, 2),
        ],
        reward_credits=4,
        reward_cards=2,
    ),
]


def create_location_deck(rng: Any = None, locations_between: int = 3) -> list[Location]:
    """
    Build the ordered list of locations for one run.

    Entrance first, exit last, one objective placed at random among up to
    locations_between other locations. Every location is a fresh copy.
    """
    rng = rng or random
    entrance = rng.choice([loc for loc in LOCATIONS if loc.location_type == "entrance"])
    exit_ = rng.choice([loc for loc in LOCATIONS if loc.is_exit])
    objective = rng.choice([loc for loc in LOCATIONS if loc.has_objective and not loc.is_exit])

    chosen = {entrance.id, exit_.id, objective.id}
    others = [loc for loc in LOCATIONS if loc.id not in chosen]
    rng.shuffle(others)
    middle = others[:locations_between]
    middle.insert(rng.randrange(len(middle) + 1), objective)

    return [copy.deepcopy(loc) for loc in [entrance, *middle, exit_]]


def _activate(location: Location) -> None:
    for threat in location.threats:
        threat.is_active = True


def initialize_location_deck(rng: Any = None, locations_between: int = 3) -> LocationDeck:
    """A location deck positioned at its entrance, with the entrance's threats active."""
    current, *rest = create_location_deck(rng, locations_between)
    _activate(current)
    return LocationDeck(draw_pile=rest, current_location=current)


def draw_next_location(deck: LocationDeck) -> Location | None:
    """
    Move the run to the next location.

    The previous location's threats stop acting. Returns the new location,
    or None when the draw pile is empty.
    """
    if not deck.draw_pile:
        return None

    previous = deck.current_location
    if previous is not None:
        for threat in previous.threats:
            threat.is_active = False
        deck.visited_locations.append(previous)

    deck.current_location = deck.draw_pile.pop(0)
    _activate(deck.current_location)
    if deck.current_location.has_objective:
        deck.has_found_objective = True
    if deck.current_location.is_exit:
        deck.has_reached_exit = True
    return deck.current_location
