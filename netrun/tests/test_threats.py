"""
Tests for threat action potential.
"""

from ..engine_core.threats import gain_threat_ap, grant_ap_after_execution, grant_ap_after_reshuffle, reshuffle_hook


class TestGainThreatAp:
    """Tests for the AP threshold rule."""

    def test_reaching_max_does_not_play(self, threat):
        """Landing exactly on max defers the play."""
        plays = []
        threat.on_play = plays.append
        threat.action_potential = 2

        assert gain_threat_ap(threat, 1) is False
        assert threat.action_potential == 3
        assert plays == []

    def test_crossing_max_plays(self, threat):
        """Going above max from at or below plays the threat's card."""
        plays = []
        threat.on_play = plays.append
        threat.action_potential = 3

        assert gain_threat_ap(threat, 1) is True
        assert plays == [threat]

    def test_already_above_max_does_not_replay(self, threat):
        """A threat above max does not play again."""
        plays = []
        threat.on_play = plays.append
        threat.action_potential = 4

        assert gain_threat_ap(threat, 1) is False
        assert plays == []


class TestGrants:
    """Tests for when threats gain AP."""

    def test_execution_grant_skips_inactive(self, threat):
        """Only active threats gain AP after execution."""
        threat.is_active = False

        grant_ap_after_execution([threat])

        assert threat.action_potential == 0

    def test_reshuffle_grant_reaches_inactive(self, threat):
        """Every threat gains AP on a reshuffle."""
        threat.is_active = False

        grant_ap_after_reshuffle([threat])

        assert threat.action_potential == 1

    def test_reshuffle_hook(self, game_state, threat):
        """The hook feeds the game's threats."""
        hook = reshuffle_hook(game_state)

        hook()

        assert threat.action_potential == 1
        assert reshuffle_hook(None) is None
