"""
Netrun Cards - Base card data and the enhanced (component) versions.

Base cards carry the card text and legacy effect descriptors; the
enhanced versions are what the execution engine runs.

Component order on every enhanced card:
- Targets (and TargetsConfirmed after a selection)
- Costs
- Synergies and combos
- Effects
"""

from __future__ import annotations
from typing import Any

from ..engine_core.cards import Card, EnhancedCard, LegacyEffect, create_card_with_components
from ..engine_core.components import ComponentKind
from ..engine_core.costs import ActionCost, CreditCost, KeywordRequirement, TrashCost
from ..engine_core.effects import (
    CancelCard, ComboEffect, DealDamage, DiscardCards, DrawCards, GainAction,
    GainCredits, KeywordSynergy, PreventDamage, RecycleGain, RiskReward, ScanEntity,
)
from ..engine_core.targeting import MultiEntityTarget, SelfTarget, SingleEntityTarget, TargetsConfirmed


def _can_be_damaged(target: Any) -> bool:
    return getattr(target, "health", None) is not None


def _is_corp(target: Any) -> bool:
    return getattr(target, "faction", None) == "Corp"


def _has_ice(card: Card) -> bool:
    return "ICE" in card.keywords


# ============================================================================
# Base cards
# ============================================================================

CREDIT_CHIP = Card(
    id="credit_chip",
    name="Credit Chip",
    cost=0,
    faction="Neutral",
    card_type="Resource",
    keywords=["Basic"],
    effects=[LegacyEffect("gain_credits", 1)],
    description="Gain 1 credit.",
)

PERSONAL_DATA = Card(
    id="personal_data",
    name="Personal Data",
    cost=2,
    faction="Neutral",
    card_type="Data",
    keywords=["Basic"],
    description="Your identity, scattered across a hundred databases.",
)

CRYPTO_WALLET = Card(
    id="crypto_wallet",
    name="Crypto Wallet",
    cost=3,
    faction="Street",
    card_type="Resource",
    keywords=["Credit"],
    effects=[LegacyEffect("gain_credits", 2)],
    description="Gain 2 credits.",
)

DARK_MARKET = Card(
    id="dark_market",
    name="Dark Market",
    cost=5,
    faction="Street",
    card_type="Location",
    keywords=["Street", "Credit"],
    effects=[
        LegacyEffect("gain_credits", 1),
        LegacyEffect("draw_cards", 1),
        LegacyEffect("gain_action", 1),
    ],
    description="Gain 1 credit, draw 1 card and gain 1 action.",
)

STREET_THUG = Card(
    id="street_thug",
    name="Street Thug",
    cost=4,
    faction="Street",
    card_type="Ally",
    keywords=["Street"],
    effects=[LegacyEffect("damage_opponent", 1, synergy_keyword="Street", synergy_bonus=1)],
    description="Deal 1 damage to a threat. +1 damage if another Street card is in play.",
)

MALICIOUS_CODE = Card(
    id="malicious_code",
    name="Malicious Code",
    cost=5,
    faction="Runner",
    card_type="Program",
    keywords=["Virus", "Program"],
    effects=[LegacyEffect("damage_opponent", 2, synergy_keyword="Virus", synergy_bonus=1)],
    description="Deal 2 damage to a threat. +1 damage if another Virus card is in play.",
)

DATA_BREACH = Card(
    id="data_breach",
    name="Data Breach",
    cost=4,
    faction="Runner",
    card_type="Event",
    keywords=["Stealth"],
    effects=[LegacyEffect("draw_cards", 2), LegacyEffect("force_discard", 1)],
    description="Draw 2 cards. An opponent discards 1 card at random (+1 with Stealth).",
)

FIREWALL = Card(
    id="firewall",
    name="Firewall",
    cost=3,
    faction="Corp",
    card_type="Program",
    keywords=["ICE"],
    effects=[LegacyEffect("prevent_damage", 2)],
    description="Prevent the next 2 damage. +1 if another ICE card is in play.",
)

SYSTEM_PURGE = Card(
    id="system_purge",
    name="System Purge",
    cost=6,
    faction="Corp",
    card_type="Event",
    keywords=["Purge"],
    effects=[LegacyEffect("draw_cards", 1), LegacyEffect("gain_action", 1)],
    description="Draw 1 card, discard 1 card of your choice and gain 1 action.",
)

NEURAL_IMPLANT = Card(
    id="neural_implant",
    name="Neural Implant",
    cost=7,
    faction="Street",
    card_type="Cyberware",
    keywords=["Cyberware"],
    effects=[LegacyEffect("draw_cards", 3)],
    description="Requires Cyberware in play. Draw 3 cards.",
)

CORPORATE_FUNDING = Card(
    id="corporate_funding",
    name="Corporate Funding",
    cost=6,
    faction="Corp",
    card_type="Resource",
    keywords=["Credit"],
    effects=[LegacyEffect("gain_credits", 3)],
    description="Gain 3 credits.",
)

HACKER_DEN = Card(
    id="hacker_den",
    name="Hacker Den",
    cost=5,
    faction="Runner",
    card_type="Location",
    keywords=["Stealth"],
    effects=[LegacyEffect("draw_cards", 2), LegacyEffect("gain_action", 1)],
    description="Draw 2 cards and gain 1 action.",
)

AMBUSH_PROTOCOL = Card(
    id="ambush_protocol",
    name="Ambush Protocol",
    cost=4,
    faction="Corp",
    card_type="Event",
    keywords=["ICE", "Trap"],
    effects=[LegacyEffect("damage_opponent", 2)],
    description="Deal 2 damage to every threat at this location.",
)

BACKDOOR = Card(
    id="backdoor",
    name="Backdoor",
    cost=3,
    faction="Runner",
    card_type="Program",
    keywords=["Stealth", "Program"],
    effects=[LegacyEffect("draw_cards", 1)],
    description="Choose an ICE card in play to slip past. Draw 1 card.",
)

RISKY_HACK = Card(
    id="risky_hack",
    name="Risky Hack",
    cost=3,
    faction="Runner",
    card_type="Event",
    keywords=["Virus"],
    description="50%: gain 4 credits. Otherwise lose 2 credits.",
)

TRACE_PROGRAM = Card(
    id="trace_program",
    name="Trace Program",
    cost=5,
    faction="Corp",
    card_type="Program",
    keywords=["Trace"],
    effects=[LegacyEffect("force_discard", 1)],
    description="An opponent of your choice discards 1 card at random.",
)

DESPERATE_HACK = Card(
    id="desperate_hack",
    name="Desperate Hack",
    cost=2,
    faction="Runner",
    card_type="Event",
    keywords=["Virus", "Anarch"],
    description="60%: deal 4 damage to a threat. Otherwise take 2 damage.",
)

CIRCUIT_BREAKER = Card(
    id="circuit_breaker",
    name="Circuit Breaker",
    cost=1,
    faction="Runner",
    card_type="Program",
    keywords=["Anarch", "Program"],
    description="Trash a program in play to deal 3 damage to a threat, and gain credits equal to its cost.",
)

NETWORK_SCANNER = Card(
    id="network_scanner",
    name="Network Scanner",
    cost=4,
    faction="Runner",
    card_type="Program",
    keywords=["Stealth", "Program"],
    description="Scan a threat to reveal its details. Requires a Stealth card in play. Draw a card.",
)

ICE_BREAKER = Card(
    id="ice_breaker",
    name="ICE Breaker",
    cost=5,
    faction="Runner",
    card_type="Program",
    keywords=["Virus", "Program"],
    description="Cancel a queued card with ICE. Deal 2 damage to a Corp threat.",
)


# ============================================================================
# Enhanced cards
# ============================================================================

ENHANCED_CREDIT_CHIP = create_card_with_components(CREDIT_CHIP, [
    SelfTarget(),
    ActionCost(0),
    GainCredits(1),
])

ENHANCED_PERSONAL_DATA = create_card_with_components(PERSONAL_DATA, [])

ENHANCED_CRYPTO_WALLET = create_card_with_components(CRYPTO_WALLET, [
    CreditCost(3),
    ActionCost(1),
    SelfTarget(),
    GainCredits(2),
])

ENHANCED_DARK_MARKET = create_card_with_components(DARK_MARKET, [
    CreditCost(5),
    ActionCost(1),
    SelfTarget(),
    GainCredits(1),
    DrawCards(1),
    GainAction(1),
])

ENHANCED_STREET_THUG = create_card_with_components(STREET_THUG, [
    SingleEntityTarget("threat", allow_selection=False, target_filter=_can_be_damaged),
    CreditCost(4),
    ActionCost(1),
    ComboEffect("Street", "damage", 1),
    DealDamage(1),
])

ENHANCED_MALICIOUS_CODE = create_card_with_components(MALICIOUS_CODE, [
    SingleEntityTarget("threat", allow_selection=True, target_filter=_can_be_damaged),
    TargetsConfirmed(),
    CreditCost(5),
    ActionCost(1),
    KeywordSynergy("Virus", ComponentKind.DEAL_DAMAGE, 1),
    DealDamage(2),
])

ENHANCED_DATA_BREACH = create_card_with_components(DATA_BREACH, [
    MultiEntityTarget("opponents", max_targets=1),
    TargetsConfirmed(),
    CreditCost(4),
    ActionCost(1),
    KeywordSynergy("Stealth", ComponentKind.DISCARD_CARDS, 1),
    DiscardCards(1, random=True),
    SelfTarget(),
    DrawCards(2),
])

ENHANCED_FIREWALL = create_card_with_components(FIREWALL, [
    CreditCost(3),
    ActionCost(1),
    SelfTarget(),
    KeywordSynergy("ICE", ComponentKind.PREVENT_DAMAGE, 1),
    PreventDamage(2),
])

ENHANCED_SYSTEM_PURGE = create_card_with_components(SYSTEM_PURGE, [
    CreditCost(6),
    ActionCost(1),
    SelfTarget(),
    DrawCards(1),
    DiscardCards(1),
    GainAction(1),
])

ENHANCED_NEURAL_IMPLANT = create_card_with_components(NEURAL_IMPLANT, [
    CreditCost(7),
    ActionCost(1),
    KeywordRequirement("Cyberware", 1),
    SelfTarget(),
    DrawCards(3),
])

ENHANCED_CORPORATE_FUNDING = create_card_with_components(CORPORATE_FUNDING, [
    CreditCost(6),
    ActionCost(1),
    SelfTarget(),
    GainCredits(3),
])

ENHANCED_HACKER_DEN = create_card_with_components(HACKER_DEN, [
    CreditCost(5),
    ActionCost(1),
    SelfTarget(),
    DrawCards(2),
    GainAction(1),
])

ENHANCED_AMBUSH_PROTOCOL = create_card_with_components(AMBUSH_PROTOCOL, [
    MultiEntityTarget("threats", target_filter=_can_be_damaged),
    CreditCost(4),
    ActionCost(1),
    DealDamage(2),
])

ENHANCED_BACKDOOR = create_card_with_components(BACKDOOR, [
    CreditCost(3),
    ActionCost(1),
    SingleEntityTarget("card", allow_selection=True, target_filter=_has_ice),
    SelfTarget(),
    DrawCards(1),
])

ENHANCED_RISKY_HACK = create_card_with_components(RISKY_HACK, [
    CreditCost(3),
    ActionCost(1),
    SelfTarget(),
    RiskReward("credits", "credits", 50, 2, 4),
])

ENHANCED_TRACE_PROGRAM = create_card_with_components(TRACE_PROGRAM, [
    SingleEntityTarget("opponent", allow_selection=True),
    TargetsConfirmed(),
    CreditCost(5),
    ActionCost(1),
    DiscardCards(1, random=True),
])

ENHANCED_DESPERATE_HACK = create_card_with_components(DESPERATE_HACK, [
    SingleEntityTarget("threat", allow_selection=True, target_filter=_can_be_damaged),
    TargetsConfirmed(),
    CreditCost(2),
    ActionCost(1),
    KeywordSynergy("Virus", ComponentKind.RISK_REWARD, 1),
    RiskReward("health", "damage", 60, 2, 4),
])

ENHANCED_CIRCUIT_BREAKER = create_card_with_components(CIRCUIT_BREAKER, [
    SingleEntityTarget("threat", allow_selection=True, target_filter=_can_be_damaged),
    TargetsConfirmed(),
    CreditCost(1),
    ActionCost(1),
    TrashCost("program"),
    ComboEffect("Virus", "damage", 1),
    DealDamage(3),
    RecycleGain("credits"),
])

ENHANCED_NETWORK_SCANNER = create_card_with_components(NETWORK_SCANNER, [
    SingleEntityTarget("threat", allow_selection=True),
    TargetsConfirmed(),
    CreditCost(4),
    ActionCost(1),
    ScanEntity(reveal_full_info=True),
    KeywordRequirement("Stealth", 1, "play"),
    SelfTarget(),
    DrawCards(1),
])

ENHANCED_ICE_BREAKER = create_card_with_components(ICE_BREAKER, [
    SingleEntityTarget("threat", allow_selection=True, target_filter=_is_corp),
    TargetsConfirmed(),
    CreditCost(5),
    ActionCost(1),
    CancelCard(target_card_condition=_has_ice),
    DealDamage(2),
])


ENHANCED_CARDS: list[EnhancedCard] = [
    ENHANCED_CREDIT_CHIP,
    ENHANCED_PERSONAL_DATA,
    ENHANCED_CRYPTO_WALLET,
    ENHANCED_DARK_MARKET,
    ENHANCED_STREET_THUG,
    ENHANCED_MALICIOUS_CODE,
    ENHANCED_DATA_BREACH,
    ENHANCED_FIREWALL,
    ENHANCED_SYSTEM_PURGE,
    ENHANCED_NEURAL_IMPLANT,
    ENHANCED_CORPORATE_FUNDING,
    ENHANCED_HACKER_DEN,
    ENHANCED_AMBUSH_PROTOCOL,
    ENHANCED_BACKDOOR,
    ENHANCED_RISKY_HACK,
    ENHANCED_TRACE_PROGRAM,
    ENHANCED_DESPERATE_HACK,
    ENHANCED_CIRCUIT_BREAKER,
    ENHANCED_NETWORK_SCANNER,
    ENHANCED_ICE_BREAKER,
]

_CARDS_BY_ID = {card.id: card for card in ENHANCED_CARDS}

STARTER_IDS = {CREDIT_CHIP.id, PERSONAL_DATA.id}

# Everything except the starter cards can show up in the market
MARKET_CARD_POOL: list[EnhancedCard] = [c for c in ENHANCED_CARDS if c.id not in STARTER_IDS]


def get_enhanced_card(card_id: str) -> EnhancedCard | None:
    """Get the enhanced template for a card ID."""
    return _CARDS_BY_ID.get(card_id)


def get_enhanced_starting_deck() -> list[EnhancedCard]:
    """Standard starting deck: 7 Credit Chips and 3 Personal Data, as fresh instances."""
    return (
        [ENHANCED_CREDIT_CHIP.instantiate() for _ in range(7)]
        + [ENHANCED_PERSONAL_DATA.instantiate() for _ in range(3)]
    )
