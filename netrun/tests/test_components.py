"""
Tests for individual card components.

Tests:
- Targeting resolution
- Costs and requirements
- Effects, synergies and combos
"""

import pytest

from ..engine_core.components import ComponentKind, coerce_kind, execute_card_components
from ..engine_core.costs import HealthCost, KeywordRequirement, TrashCost
from ..engine_core.effects import (
    ComboEffect, DealDamage, DiscardCards, DrawCards, GainAction, KeywordSynergy,
    PreventDamage, RecycleGain, RevealCard, ScanEntity,
)
from ..engine_core.targeting import MultiEntityTarget, SelfTarget, SingleEntityTarget, TargetsConfirmed
from ..engine_core.zones import CardZone, current_zone


class TestTargeting:
    """Tests for targeting components."""

    def test_auto_opponent_is_first_in_list(self, make_card, make_context, opponent):
        """Auto-selected opponents follow list order."""
        card = make_card("Jab", [SingleEntityTarget("opponent", allow_selection=False)])
        context = make_context(card)

        execute_card_components(card, context)

        assert context.targets == [opponent]

    def test_auto_threat_uses_filter(self, make_card, make_context, threat):
        """The first threat passing the filter is picked, or nothing."""
        card = make_card("Probe", [
            SingleEntityTarget("threat", allow_selection=False, target_filter=lambda t: t.attack > 5),
        ])
        context = make_context(card)

        execute_card_components(card, context)

        assert context.targets == []

    def test_auto_card_target_can_pick_several(self, make_card, make_context, player):
        """Single card targeting returns every matching card in play."""
        player.in_play.extend([
            make_card("Virus A", keywords=["Virus"]),
            make_card("Virus B", keywords=["Virus"]),
            make_card("Clean"),
        ])
        card = make_card("Sweep", [
            SingleEntityTarget("card", allow_selection=False, target_filter=lambda c: "Virus" in c.keywords),
        ])
        context = make_context(card)

        execute_card_components(card, context)

        assert [c.name for c in context.targets] == ["Virus A", "Virus B"]

    def test_supplied_targets_short_circuit(self, make_card, make_context, threat):
        """Existing targets skip the selection prompt."""
        card = make_card("Strike", [SingleEntityTarget("threat", allow_selection=True)])
        context = make_context(card, targets=[threat])

        result = execute_card_components(card, context)

        assert result.is_complete
        assert context.targets == [threat]

    def test_multi_target_respects_limit(self, make_card, make_context, player, opponent):
        """MultiEntityTarget takes at most max_targets candidates."""
        card = make_card("Spray", [MultiEntityTarget("players", max_targets=1)])
        context = make_context(card)

        execute_card_components(card, context)

        assert context.targets == [player]

    def test_unknown_target_type_rejected(self):
        """Target types are checked at construction."""
        with pytest.raises(ValueError):
            SingleEntityTarget("everyone")

    def test_targets_confirmed_needs_targets(self, make_card, make_context):
        """TargetsConfirmed hard-fails when nothing was selected."""
        card = make_card("Hollow", [TargetsConfirmed()])
        context = make_context(card)

        result = execute_card_components(card, context)

        assert not result.is_complete
        assert not context.awaiting_target_selection
        assert not context.targets_confirmed

    def test_targets_confirmed_marks_context(self, make_card, make_context, threat):
        """TargetsConfirmed records the confirmation."""
        card = make_card("Aim", [TargetsConfirmed()])
        context = make_context(card, targets=[threat])

        execute_card_components(card, context)

        assert context.targets_confirmed


class TestCosts:
    """Tests for costs and requirements."""

    def test_health_cost(self, make_card, make_context, player):
        """HealthCost takes health from the acting player."""
        card = make_card("Jack In", [HealthCost(2, label="Brain")])

        execute_card_components(card, make_context(card))

        assert player.health == 8

    def test_keyword_requirement_counts(self, make_card, make_context, player):
        """A requirement fails when too few cards carry the keyword."""
        player.in_play.append(make_card("Virus A", keywords=["Virus"]))
        card = make_card("Outbreak", [KeywordRequirement("Virus", count=2)])
        context = make_context(card)

        result = execute_card_components(card, context)

        assert result.reason == "Requirement not met: Need 2 Virus card(s), found 1."

    def test_keyword_requirement_in_hand(self, make_card, make_context, player):
        """Requirements can look at the hand instead of play."""
        player.hand.append(make_card("Stealth Rig", keywords=["Stealth"]))
        card = make_card("Ghost", [KeywordRequirement("Stealth", location="hand")])

        assert execute_card_components(card, make_context(card)).is_complete

    def test_trash_cost_with_preselected_card(self, make_card, make_context, player, program_card):
        """A card already targeted pays the trash cost."""
        player.in_play.append(program_card)
        card = make_card("Burn", [TrashCost("program")])
        context = make_context(card, targets=[program_card])

        result = execute_card_components(card, context)

        assert result.is_complete
        assert player.in_play == []
        assert player.discard[0].instance_id == program_card.instance_id
        assert current_zone(player.discard[0]) == CardZone.DISCARD
        assert context.recently_trashed == [program_card]

    def test_trash_cost_rejects_wrong_type(self, make_card, make_context, player):
        """A targeted card of the wrong type fails the cost."""
        chip = make_card("Chip", card_type="Resource")
        player.in_play.append(chip)
        card = make_card("Burn", [TrashCost("program")])
        context = make_context(card, targets=[chip])

        result = execute_card_components(card, context)

        assert not result.is_complete
        assert player.in_play == [chip]

    def test_trash_cost_specific_keyword(self, make_card):
        """A specific trash cost also checks the keyword."""
        cost = TrashCost("program", specific=True, specific_keyword="ICE")

        assert not cost.matches(make_card("Plain", card_type="Program"))
        assert cost.matches(make_card("Wall", card_type="Program", keywords=["ICE"]))


class TestEffects:
    """Tests for effect components."""

    def test_damage_absorbed_by_protection(self, make_card, make_context, threat):
        """Protection soaks damage before health."""
        threat.damage_protection = 1
        card = make_card("Zap", [DealDamage(3)])

        execute_card_components(card, make_context(card, targets=[threat]))

        assert threat.health == 2
        assert threat.damage_protection == 0

    def test_damage_announces_defeat(self, make_card, make_context, threat, log):
        """Damage that drops health to 0 narrates a defeat."""
        card = make_card("Overload", [DealDamage(4)])

        execute_card_components(card, make_context(card, targets=[threat]))

        assert "Patrol Drone was defeated!" in log.messages()

    def test_prevent_damage_adds_protection(self, make_card, make_context, player):
        """PreventDamage stacks on existing protection."""
        player.damage_protection = 1
        card = make_card("Shield", [SelfTarget(), PreventDamage(2)])

        execute_card_components(card, make_context(card))

        assert player.damage_protection == 3

    def test_effects_skip_unsuitable_targets(self, make_card, make_context, threat):
        """Threats have no actions to gain."""
        card = make_card("Boost", [GainAction(2)])

        result = execute_card_components(card, make_context(card, targets=[threat]))

        assert result.is_complete
        assert not hasattr(threat, "actions")

    def test_draw_cards_moves_to_hand(self, make_card, make_context, player):
        """Drawn cards carry a hand marker."""
        player.deck.extend([make_card("Top"), make_card("Bottom")])
        card = make_card("Research", [SelfTarget(), DrawCards(1)])

        execute_card_components(card, make_context(card))

        assert [c.name for c in player.hand] == ["Top"]
        assert current_zone(player.hand[0]) == CardZone.HAND

    def test_random_discard(self, make_card, make_context, opponent):
        """Random discards happen immediately."""
        opponent.hand.extend([make_card("One"), make_card("Two")])
        card = make_card("Scramble", [SingleEntityTarget("opponent", allow_selection=False), DiscardCards(1, random=True)])

        result = execute_card_components(card, make_context(card))

        assert result.is_complete
        assert [c.name for c in opponent.hand] == ["Two"]
        assert [c.name for c in opponent.discard] == ["One"]

    def test_opponent_discards_from_front(self, make_card, make_context, opponent):
        """A non-acting target discards from the front of their hand without pausing."""
        opponent.hand.extend([make_card("One"), make_card("Two"), make_card("Three")])
        card = make_card("Drain", [SingleEntityTarget("opponent", allow_selection=False), DiscardCards(2)])

        result = execute_card_components(card, make_context(card))

        assert result.is_complete
        assert [c.name for c in opponent.hand] == ["Three"]

    def test_recycle_with_nothing_trashed(self, make_card, make_context, player):
        """RecycleGain does nothing when no card was trashed."""
        card = make_card("Scrap", [RecycleGain("credits")])

        execute_card_components(card, make_context(card))

        assert player.credits == 0

    def test_reveal_and_scan(self, make_card, make_context, threat, log):
        """Information effects flip and describe their targets."""
        threat.is_face_down = True
        card = make_card("Recon", [RevealCard(), ScanEntity(reveal_full_info=True)])

        execute_card_components(card, make_context(card, targets=[threat]))

        assert not threat.is_face_down
        assert "Attack: 2" in log.messages()
        assert "Action Potential: 0/3" in log.messages()


class TestSynergy:
    """Tests for keyword synergy and combos."""

    def _striker(self, make_card):
        return make_card("Worm", [
            SingleEntityTarget("opponent", allow_selection=False),
            KeywordSynergy("Virus", "DealDamage", 1),
            DealDamage(2),
        ])

    def test_synergy_boosts_later_effect(self, make_card, make_context, player, opponent):
        """Another Virus card in play adds the bonus to the damage."""
        card = self._striker(make_card)
        player.in_play.extend([make_card("Carrier", keywords=["Virus"]), card])

        execute_card_components(card, make_context(card))

        assert opponent.health == 7

    def test_synergy_does_not_mutate_component(self, make_card, make_context, player):
        """The boosted component keeps its printed amount."""
        card = self._striker(make_card)
        player.in_play.extend([make_card("Carrier", keywords=["Virus"]), card])

        execute_card_components(card, make_context(card))

        assert card.components[2].amount == 2

    def test_own_keyword_does_not_count(self, make_card, make_context, player, opponent):
        """A card does not synergize with itself."""
        card = self._striker(make_card)
        card.keywords.append("Virus")
        player.in_play.append(card)

        execute_card_components(card, make_context(card))

        assert opponent.health == 8

    def test_combo_matches_card_type(self, make_card, make_context, player, opponent, program_card):
        """A combo keyword also matches another card's type."""
        player.in_play.append(program_card)
        card = make_card("Chain", [
            SingleEntityTarget("opponent", allow_selection=False),
            ComboEffect("Program", "damage", 2),
            DealDamage(1),
        ])

        execute_card_components(card, make_context(card))

        assert opponent.health == 7

    def test_coerce_kind_accepts_names(self):
        """Kinds can be named by value or by member name."""
        assert coerce_kind("DealDamage") == ComponentKind.DEAL_DAMAGE
        assert coerce_kind("DEAL_DAMAGE") == ComponentKind.DEAL_DAMAGE
        with pytest.raises(ValueError):
            coerce_kind("Nonsense")
