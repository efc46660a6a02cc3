"""
Threat action potential rules.

All AP changes go through gain_threat_ap. A threat plays its card when
its AP crosses from at-or-below max to above max; reaching max exactly
defers the play to the next gain.
"""

from __future__ import annotations
from typing import Callable, Iterable, TYPE_CHECKING

from .state import LocationThreat

if TYPE_CHECKING:
    from .state import GameState


def gain_threat_ap(threat: LocationThreat, amount: int) -> bool:
    """
    Add AP to a threat.

    Returns True if the gain triggered the threat's card play.
    """
    was_at_or_below_max = threat.action_potential <= threat.max_action_potential
    threat.action_potential += amount
    if was_at_or_below_max and threat.action_potential > threat.max_action_potential:
        threat.play_card()
        return True
    return False


def grant_ap_after_execution(threats: Iterable[LocationThreat]) -> list[LocationThreat]:
    """Active threats gain 1 AP after the queue executes. Returns threats that played."""
    return [t for t in threats if t.is_active and gain_threat_ap(t, 1)]


def grant_ap_after_reshuffle(threats: Iterable[LocationThreat]) -> list[LocationThreat]:
    """Every threat gains 1 AP when a deck is reshuffled. Returns threats that played."""
    return [t for t in threats if gain_threat_ap(t, 1)]


def reshuffle_hook(game_state: GameState | None) -> Callable[[], None] | None:
    """A callback granting reshuffle AP to the game's threats, if there is a game."""
    if game_state is None:
        return None

    def _on_reshuffle() -> None:
        grant_ap_after_reshuffle(game_state.all_threats())

    return _on_reshuffle
