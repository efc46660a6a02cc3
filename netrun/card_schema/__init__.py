"""Card schema - declarative card definitions, building and validation."""

from .models import CardDefinition, CardLibrary, ComponentSpec, TargetFilterSpec, Faction
from .builder import build_component, build_enhanced_card, build_card_library
from .validation import validate_card_library, CardLibraryError, ValidationResult

__all__ = [
    "CardDefinition",
    "CardLibrary",
    "ComponentSpec",
    "TargetFilterSpec",
    "Faction",
    "build_component",
    "build_enhanced_card",
    "build_card_library",
    "validate_card_library",
    "CardLibraryError",
    "ValidationResult",
]
