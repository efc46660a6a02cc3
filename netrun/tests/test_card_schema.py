"""
Tests for card definitions, building and library validation.

Tests:
- CardDefinition parsing and legacy payloads
- Building engine cards from definitions
- Library validation errors and warnings
"""

import pytest
from pydantic import ValidationError

from ..card_schema import (
    CardDefinition,
    CardLibraryError,
    TargetFilterSpec,
    build_card_library,
    build_enhanced_card,
    validate_card_library,
)
from ..engine_core.components import ComponentKind, execute_card_components
from ..engine_core.costs import ActionCost, CreditCost
from ..engine_core.effects import DealDamage, KeywordSynergy
from ..engine_core.targeting import SingleEntityTarget
from ..engine_core.zones import CardZone, InHandZone, InQueueZone, current_zone


WORM = {
    "id": "worm",
    "name": "Worm",
    "cost": 3,
    "faction": "Runner",
    "card_type": "Program",
    "keywords": ["Virus"],
    "components": [
        {"kind": "SingleEntityTarget", "target_type": "threat", "allow_selection": False,
         "filter": {"requires": "health"}},
        {"kind": "CreditCost", "amount": 3},
        {"kind": "ActionCost"},
        {"kind": "KeywordSynergy", "keyword": "Virus", "target_component": "DealDamage", "bonus_amount": 1},
        {"kind": "DealDamage", "amount": 2},
    ],
}


class TestCardDefinition:
    """Tests for parsing card definitions."""

    def test_parse_definition(self):
        """A well-formed payload validates."""
        definition = CardDefinition.model_validate(WORM)

        assert definition.faction.value == "Runner"
        assert [c.kind for c in definition.components] == [
            "SingleEntityTarget", "CreditCost", "ActionCost", "KeywordSynergy", "DealDamage",
        ]

    def test_legacy_type_key_and_zone_spelling(self):
        """Old "type" keys and zone tags are normalized."""
        definition = CardDefinition.model_validate({
            "id": "old",
            "name": "Old Card",
            "components": [{"type": "zone:hand"}, {"type": "GainCredits", "amount": 1}],
        })

        assert [c.kind for c in definition.components] == ["InHandZone", "GainCredits"]

    def test_unknown_component_kind_rejected(self):
        """Components must name a known kind."""
        with pytest.raises(ValidationError):
            CardDefinition.model_validate({"id": "x", "name": "X", "components": [{"kind": "Teleport"}]})

    def test_invalid_field_rejected(self):
        """Component fields are validated."""
        with pytest.raises(ValidationError):
            CardDefinition.model_validate({
                "id": "x",
                "name": "X",
                "components": [{"kind": "RiskReward", "risk_kind": "health", "reward_kind": "credits",
                                "chance_percent": 150, "risk_amount": 1, "reward_amount": 1}],
            })

    def test_filter_predicate(self, make_card, threat):
        """Declarative filters become predicates."""
        predicate = TargetFilterSpec(keyword="ICE", requires="health").to_predicate()

        assert not predicate(threat)
        assert not predicate(make_card("Wall", keywords=["ICE"]))


class TestBuilder:
    """Tests for building engine cards."""

    def test_build_enhanced_card(self):
        """Each component spec becomes its engine component."""
        card = build_enhanced_card(WORM)

        assert card.faction == "Runner"
        assert isinstance(card.components[0], SingleEntityTarget)
        assert isinstance(card.components[1], CreditCost)
        assert isinstance(card.components[2], ActionCost)
        assert card.components[2].amount == 1
        assert isinstance(card.components[3], KeywordSynergy)
        assert card.components[3].target_component == ComponentKind.DEAL_DAMAGE
        assert isinstance(card.components[4], DealDamage)

    def test_built_card_runs(self, make_context, player, threat):
        """A built card executes like a hand-written one."""
        card = build_enhanced_card(WORM)
        player.credits = 3
        context = make_context(card)

        result = execute_card_components(card, context)

        assert result.is_complete
        assert threat.health == 2
        assert player.credits == 0

    def test_build_zone_marker(self):
        """Zone marker specs build markers."""
        card = build_enhanced_card({
            "id": "queued",
            "name": "Queued",
            "components": [{"kind": "InQueueZone", "position": 4}],
        })

        assert isinstance(card.components[0], InQueueZone)
        assert card.components[0].position == 4
        assert current_zone(card) == CardZone.QUEUE

    def test_build_library(self):
        """Libraries are keyed by card id."""
        library = build_card_library([WORM, {"id": "blank", "name": "Blank"}])

        assert set(library) == {"worm", "blank"}


class TestLibraryValidation:
    """Tests for validate_card_library."""

    def test_valid_library(self):
        """A clean library has no errors."""
        result = validate_card_library([CardDefinition.model_validate(WORM)])

        assert result.valid
        assert result.errors == []

    def test_duplicate_ids(self):
        """Duplicate card ids are errors."""
        definition = CardDefinition.model_validate(WORM)

        result = validate_card_library([definition, definition])

        assert not result.valid
        assert "Duplicate card ID 'worm'" in result.errors

    def test_multiple_zone_markers(self, make_card):
        """A card may carry at most one zone marker."""
        card = make_card("Confused", [InHandZone(), InQueueZone(position=0)])

        result = validate_card_library([card])

        assert not result.valid
        assert "zone markers" in result.errors[0]

    def test_queue_card_with_credit_cost(self, make_card):
        """Queued cards must not keep a credit cost."""
        card = make_card("Sloppy", [CreditCost(2), InQueueZone(position=0)])

        result = validate_card_library([card])

        assert "still has a credit cost" in result.errors[0]

    def test_raise_on_error(self):
        """raise_on_error raises with the error list."""
        bad = CardDefinition(id="bad", name="", cost=-1)

        with pytest.raises(CardLibraryError) as exc_info:
            validate_card_library([bad], raise_on_error=True)

        assert len(exc_info.value.errors) == 2

    def test_warnings(self, make_card):
        """Empty libraries, bare cards and misplaced synergies warn."""
        assert validate_card_library([]).warnings == ["No cards defined - library may be incomplete"]

        late = make_card("Late", [DealDamage(1), KeywordSynergy("Virus", "DealDamage", 1)])
        result = validate_card_library([make_card("Bare"), late])

        assert result.valid
        assert "Card 'bare' has no components" in result.warnings
        assert any("comes after" in w for w in result.warnings)
