"""
Card Library Validation.

Validates that:
1. Card IDs are present and unique
2. Names are present and costs are not negative
3. Each card carries at most one zone marker
4. Queue-zone cards carry no credit cost
5. Synergies point at a component the card actually has
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable

from ..engine_core.components import component_tag
from ..engine_core.zones import CardZone, is_credit_cost, zone_of_component
from .models import CardDefinition


BOOSTING_KINDS = {"KeywordSynergy"}


class CardLibraryError(Exception):
    """Raised when card library validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Card library validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_card_library(
    cards: Iterable[CardDefinition | Any],
    raise_on_error: bool = False,
) -> ValidationResult:
    """
    Validate a card library.

    Accepts CardDefinition models or built cards. Returns ValidationResult
    with errors and warnings; raises CardLibraryError if raise_on_error=True
    and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for card in cards:
        if not card.id:
            errors.append("Card has empty ID")
        elif card.id in seen:
            errors.append(f"Duplicate card ID '{card.id}'")
        seen.add(card.id)

        errors.extend(_validate_card(card))
        warnings.extend(_card_warnings(card))

    if not seen:
        warnings.append("No cards defined - library may be incomplete")

    result = ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise CardLibraryError(errors)
    return result


def _validate_card(card: Any) -> list[str]:
    """Validate a single card."""
    errors = []
    if not card.name:
        errors.append(f"Card '{card.id}' has empty name")
    if card.cost < 0:
        errors.append(f"Card '{card.id}' has negative cost {card.cost}")

    components = list(getattr(card, "components", None) or [])
    zones = [z for z in (zone_of_component(c) for c in components) if z is not None]
    if len(zones) > 1:
        errors.append(
            f"Card '{card.id}' has {len(zones)} zone markers: {', '.join(z.value for z in zones)}"
        )
    if CardZone.QUEUE in zones and any(is_credit_cost(c) for c in components):
        errors.append(f"Card '{card.id}' is in the queue zone but still has a credit cost")

    return errors


def _card_warnings(card: Any) -> list[str]:
    warnings = []
    components = list(getattr(card, "components", None) or [])
    if not components:
        warnings.append(f"Card '{card.id}' has no components")
        return warnings

    tags = [component_tag(c) for c in components]
    for index, component in enumerate(components):
        if tags[index] not in BOOSTING_KINDS:
            continue
        target = component.target_component
        target = getattr(target, "value", target)
        if target not in tags:
            warnings.append(f"Card '{card.id}': synergy targets {target}, which the card does not have")
        elif target not in tags[index + 1:]:
            warnings.append(f"Card '{card.id}': synergy comes after the {target} it boosts")
    return warnings
