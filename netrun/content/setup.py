"""
Game Setup - Creates the initial game state.

This module handles:
- Creating players with shuffled starting decks
- Drawing the first player's opening hand
- Dealing the market
- Laying out the location deck and arming its threats

Supports 1-4 players. All randomness comes from one rng, seeded from the
config when none is passed.
"""

from __future__ import annotations
from typing import Any, Callable
import random

from ..config import EngineConfig
from ..engine_core.market import create_market
from ..engine_core.player_ops import apply_damage, shuffle_deck, start_turn
from ..engine_core.state import GamePhase, GameState, LocationThreat, Player
from ..engine_core.zones import CardZone, move_card_to_zone
from .cards import MARKET_CARD_POOL, get_enhanced_starting_deck
from .locations import initialize_location_deck


MIN_PLAYERS = 1
MAX_PLAYERS = 4


def initialize_game(
    player_names: list[str],
    config: EngineConfig | None = None,
    rng: Any = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        player_names: One name per player, in seat order (first is human)
        config: Game parameters (defaults if not provided)
        rng: Random source (random.Random(config.random_seed) if not provided)

    Returns:
        Initial GameState in the first player's action phase
    """
    if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
        raise ValueError(f"Netrun supports {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(player_names)}")

    config = config or EngineConfig()
    rng = rng or random.Random(config.random_seed)

    players = [_create_player(i, name, config, rng) for i, name in enumerate(player_names)]

    # Only the first player draws an opening hand; the others draw when their turn starts
    start_turn(
        players[0],
        hand_size=config.hand_size,
        actions=config.starting_actions,
        buys=config.starting_buys,
        rng=rng,
    )

    state = GameState(
        players=players,
        active_player_index=0,
        market=create_market(MARKET_CARD_POOL, config.market_size, rng),
        phase=GamePhase.ACTION,
        turn_number=1,
        location_deck=initialize_location_deck(rng, config.locations_between),
    )
    wire_threat_attacks(state)
    return state


def _create_player(index: int, name: str, config: EngineConfig, rng: Any) -> Player:
    deck = [move_card_to_zone(card, None, CardZone.DECK) for card in get_enhanced_starting_deck()]
    return Player(
        id=f"player_{index}",
        name=name,
        deck=shuffle_deck(deck, rng),
        health=config.starting_health,
        is_human=index == 0,
    )


def wire_threat_attacks(state: GameState, log: Callable[[str], None] | None = None) -> None:
    """
    Make every threat in the run attack the active player when it plays.

    Call again with a log to narrate the attacks.
    """
    def _attack(threat: LocationThreat) -> None:
        if not state.players:
            return
        target = state.active_player
        taken = apply_damage(target, threat.attack)
        if log is not None:
            log(f"{threat.name} attacks {target.name} for {taken} damage.")

    if state.location_deck is None:
        return
    deck = state.location_deck
    locations = [*deck.visited_locations, *([deck.current_location] if deck.current_location else []), *deck.draw_pile]
    for location in locations:
        for threat in location.threats:
            threat.on_play = _attack
