"""
Pydantic models for declarative card definitions.

A card library is plain data (JSON, a dict literal) that validates into
CardDefinition models. Components are a union discriminated by "kind",
which is the engine component's class name. Older payloads used a "type"
key and assorted zone spellings ("inHandZone", "zone:hand"); those are
normalized before validation.
"""

from enum import Enum
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from ..engine_core.zones import ZONE_MARKERS, ZONE_TAG_ALIASES


class Faction(str, Enum):
    CORP = "Corp"
    RUNNER = "Runner"
    STREET = "Street"
    NEUTRAL = "Neutral"


class TargetFilterSpec(BaseModel):
    """
    Declarative stand-in for a target predicate.

    Every set field must match. requires names an attribute the target
    must have (e.g. "health" to accept only things that can be damaged).
    """
    keyword: Optional[str] = None
    faction: Optional[str] = None
    card_type: Optional[str] = None
    requires: Optional[str] = None

    def to_predicate(self) -> Callable[[Any], bool]:
        def _matches(target: Any) -> bool:
            if self.keyword is not None and self.keyword not in (getattr(target, "keywords", None) or []):
                return False
            if self.faction is not None and getattr(target, "faction", None) != self.faction:
                return False
            if self.card_type is not None:
                if str(getattr(target, "card_type", "")).lower() != self.card_type.lower():
                    return False
            if self.requires is not None and getattr(target, self.requires, None) is None:
                return False
            return True

        return _matches


# =============================================================================
# Targeting
# =============================================================================

class SingleEntityTargetSpec(BaseModel):
    kind: Literal["SingleEntityTarget"] = "SingleEntityTarget"
    target_type: Literal["player", "opponent", "threat", "card"]
    allow_selection: bool = True
    filter: Optional[TargetFilterSpec] = None


class MultiEntityTargetSpec(BaseModel):
    kind: Literal["MultiEntityTarget"] = "MultiEntityTarget"
    target_type: Literal["players", "opponents", "threats", "cards"]
    max_targets: Optional[int] = Field(None, ge=1)
    allow_selection: bool = False
    filter: Optional[TargetFilterSpec] = None


class SelfTargetSpec(BaseModel):
    kind: Literal["SelfTarget"] = "SelfTarget"


class TargetsConfirmedSpec(BaseModel):
    kind: Literal["TargetsConfirmed"] = "TargetsConfirmed"
    confirmed: bool = False


# =============================================================================
# Costs
# =============================================================================

class CreditCostSpec(BaseModel):
    kind: Literal["CreditCost"] = "CreditCost"
    amount: int = Field(ge=0)


class ActionCostSpec(BaseModel):
    kind: Literal["ActionCost"] = "ActionCost"
    amount: int = Field(1, ge=0)


class HealthCostSpec(BaseModel):
    kind: Literal["HealthCost"] = "HealthCost"
    amount: int = Field(ge=0)
    label: str = "Meat"


class TrashCostSpec(BaseModel):
    kind: Literal["TrashCost"] = "TrashCost"
    target_type: str
    specific: bool = False
    specific_keyword: Optional[str] = None


class KeywordRequirementSpec(BaseModel):
    kind: Literal["KeywordRequirement"] = "KeywordRequirement"
    keyword: str
    count: int = Field(1, ge=1)
    location: Literal["play", "hand", "discard"] = "play"


# =============================================================================
# Effects
# =============================================================================

class GainCreditsSpec(BaseModel):
    kind: Literal["GainCredits"] = "GainCredits"
    amount: int


class GainActionSpec(BaseModel):
    kind: Literal["GainAction"] = "GainAction"
    amount: int = 1


class DealDamageSpec(BaseModel):
    kind: Literal["DealDamage"] = "DealDamage"
    amount: int = Field(ge=0)


class PreventDamageSpec(BaseModel):
    kind: Literal["PreventDamage"] = "PreventDamage"
    amount: int = Field(ge=0)


class DrawCardsSpec(BaseModel):
    kind: Literal["DrawCards"] = "DrawCards"
    amount: int = Field(ge=0)


class DiscardCardsSpec(BaseModel):
    kind: Literal["DiscardCards"] = "DiscardCards"
    amount: int = Field(ge=0)
    random: bool = False


class RecycleGainSpec(BaseModel):
    kind: Literal["RecycleGain"] = "RecycleGain"
    gain: Literal["credits", "actions", "draw"] = "credits"
    per_card: Optional[int] = None


class KeywordSynergySpec(BaseModel):
    kind: Literal["KeywordSynergy"] = "KeywordSynergy"
    keyword: str
    target_component: str
    bonus_amount: int


class RiskRewardSpec(BaseModel):
    kind: Literal["RiskReward"] = "RiskReward"
    risk_kind: Literal["health", "credits", "discard"]
    reward_kind: Literal["damage", "credits", "draw", "actions"]
    chance_percent: int = Field(ge=0, le=100)
    risk_amount: int = Field(ge=0)
    reward_amount: int = Field(ge=0)


class ComboEffectSpec(BaseModel):
    kind: Literal["ComboEffect"] = "ComboEffect"
    keyword: str
    bonus_kind: Literal["damage", "credits", "draw", "actions", "prevent"]
    amount: int


class PauseQueueSpec(BaseModel):
    kind: Literal["PauseQueue"] = "PauseQueue"
    message: str = "Choose targets to continue."


class CancelCardSpec(BaseModel):
    kind: Literal["CancelCard"] = "CancelCard"
    target_card_index: Optional[int] = Field(None, ge=0)
    condition: Optional[TargetFilterSpec] = None


class RevealCardSpec(BaseModel):
    kind: Literal["RevealCard"] = "RevealCard"


class ScanEntitySpec(BaseModel):
    kind: Literal["ScanEntity"] = "ScanEntity"
    reveal_full_info: bool = False


# =============================================================================
# Zone markers
# =============================================================================

class ZoneMarkerSpec(BaseModel):
    kind: Literal[
        "InMarketZone", "InDeckZone", "InHandZone",
        "InQueueZone", "InPlayZone", "InDiscardZone",
    ]
    position: Optional[int] = None


ComponentSpec = Annotated[
    Union[
        SingleEntityTargetSpec,
        MultiEntityTargetSpec,
        SelfTargetSpec,
        TargetsConfirmedSpec,
        CreditCostSpec,
        ActionCostSpec,
        HealthCostSpec,
        TrashCostSpec,
        KeywordRequirementSpec,
        GainCreditsSpec,
        GainActionSpec,
        DealDamageSpec,
        PreventDamageSpec,
        DrawCardsSpec,
        DiscardCardsSpec,
        RecycleGainSpec,
        KeywordSynergySpec,
        RiskRewardSpec,
        ComboEffectSpec,
        PauseQueueSpec,
        CancelCardSpec,
        RevealCardSpec,
        ScanEntitySpec,
        ZoneMarkerSpec,
    ],
    Field(discriminator="kind"),
]


def normalize_component_payload(payload: Any) -> Any:
    """Rewrite legacy component payloads ("type" key, old zone spellings) to the current shape."""
    if not isinstance(payload, dict):
        return payload
    data = dict(payload)
    if "kind" not in data and "type" in data:
        data["kind"] = data.pop("type")
    kind = data.get("kind")
    if isinstance(kind, str):
        zone = ZONE_TAG_ALIASES.get(kind.replace("_", "").replace(" ", "").lower())
        if zone is not None:
            data["kind"] = ZONE_MARKERS[zone].__name__
    return data


class LegacyEffectSpec(BaseModel):
    kind: str
    amount: int
    synergy_keyword: Optional[str] = None
    synergy_bonus: int = 0


class CardDefinition(BaseModel):
    """A card and its ordered components."""
    id: str
    name: str
    cost: int = 0
    faction: Faction = Faction.NEUTRAL
    card_type: str = "Resource"
    keywords: list[str] = Field(default_factory=list)
    description: str = ""
    effects: list[LegacyEffectSpec] = Field(default_factory=list)
    components: list[ComponentSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _normalize_components(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("components"), list):
            data = dict(data)
            data["components"] = [normalize_component_payload(c) for c in data["components"]]
        return data


class CardLibrary(BaseModel):
    """A named collection of card definitions."""
    name: str = "default"
    cards: list[CardDefinition] = Field(default_factory=list)
