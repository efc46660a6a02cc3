"""
Netrun content - cards, locations and game setup.
"""

from .cards import ENHANCED_CARDS, MARKET_CARD_POOL, get_enhanced_card, get_enhanced_starting_deck
from .locations import LOCATIONS, create_location_deck, initialize_location_deck, draw_next_location
from .setup import initialize_game, wire_threat_attacks

__all__ = [
    "ENHANCED_CARDS",
    "MARKET_CARD_POOL",
    "get_enhanced_card",
    "get_enhanced_starting_deck",
    "LOCATIONS",
    "create_location_deck",
    "initialize_location_deck",
    "draw_next_location",
    "initialize_game",
    "wire_threat_attacks",
]
