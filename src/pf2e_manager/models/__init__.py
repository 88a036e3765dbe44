"""Pydantic V2 schemas for the Pathfinder 2e character manager.

Submodules:
    enums: Enumeration types (Ability, Proficiency, Tradition, ...)
    catalog: Immutable game-content catalog entries
    character: The Character snapshot and its components
    progression: Static leveling schedule
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from pf2e_manager.models.enums import (
    Ability,
    BoostEventState,
    BoostRepetitionRule,
    FeatCategory,
    Proficiency,
    Rarity,
    SkillOverflowPolicy,
    Tradition,
)

# =============================================================================
# Catalog Entries
# =============================================================================
from pf2e_manager.models.catalog import (
    CatalogEntry,
    ClassEntry,
    FeatEntry,
    SkillDefinition,
    SpecializationAvailabilityRule,
    SpecializationOption,
    SpecializationType,
    SpellEntry,
)

# =============================================================================
# Character
# =============================================================================
from pf2e_manager.models.character import (
    AbilityScores,
    AdHocSpellbook,
    Character,
    CharacterFeat,
    RankBonusSpells,
    SkillProficiency,
    VariantRules,
    calculate_modifier,
    load_character,
)


__all__ = [
    # === Enumerations ===
    "Ability",
    "Proficiency",
    "FeatCategory",
    "Rarity",
    "Tradition",
    "BoostRepetitionRule",
    "SkillOverflowPolicy",
    "BoostEventState",
    # === Catalog ===
    "CatalogEntry",
    "ClassEntry",
    "FeatEntry",
    "SpellEntry",
    "SkillDefinition",
    "SpecializationAvailabilityRule",
    "SpecializationOption",
    "SpecializationType",
    # === Character ===
    "AbilityScores",
    "SkillProficiency",
    "CharacterFeat",
    "VariantRules",
    "AdHocSpellbook",
    "RankBonusSpells",
    "Character",
    "calculate_modifier",
    "load_character",
]
