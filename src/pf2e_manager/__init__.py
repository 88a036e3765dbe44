"""Pathfinder 2e Character Manager - rules resolution engine.

Pure computations that take a character's raw choices (class, level,
variant rules, feats, specializations, spells) together with the static
game-content catalog and produce a new, internally consistent character.

ARCHITECTURE:
- The Character snapshot is the single source of truth and is immutable
- Resolvers never mutate their input; they return a new Character
- Invalid choices are no-ops that return the input unchanged
- The catalog is read-only and reached only through ContentCatalog

Example:
    >>> from pf2e_manager import Character, InMemoryCatalog, Ability
    >>> from pf2e_manager import apply_level_boosts
    >>>
    >>> hero = Character(name="Lyra", class_id="bard", level=5)
    >>> hero = apply_level_boosts(
    ...     hero, 5, [Ability.STR, Ability.DEX, Ability.CON, Ability.CHA]
    ... )
    >>> hero.ability_scores.charisma
    12

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for catalog entries and the character.
    catalog: Read-only content catalog access.
    rules: Eligibility, selection validators and resolvers.
"""

from __future__ import annotations

# Core
from pf2e_manager.core.config import Settings, get_settings
from pf2e_manager.core.exceptions import Pf2eManagerError
from pf2e_manager.core.logging import configure_logging, get_logger

# Models (The Source of Truth)
from pf2e_manager.models import (
    Ability,
    AbilityScores,
    Character,
    CharacterFeat,
    Proficiency,
    SkillProficiency,
    VariantRules,
    load_character,
)

# Catalog
from pf2e_manager.catalog import ContentCatalog, InMemoryCatalog

# Rules
from pf2e_manager.rules import (
    DEEP_LORE,
    ESOTERIC_POLYMATH,
    AdHocSpellbookManager,
    RankBonusSpellManager,
    apply_level_boosts,
    available_specialization_types,
    finalize_skill_training,
    start_boost_event,
    toggle_selection,
)


__version__ = "0.1.0"
__author__ = "Pathfinder 2e Character Manager Team"
__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core
    "Pf2eManagerError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "AbilityScores",
    "Character",
    "CharacterFeat",
    "Proficiency",
    "SkillProficiency",
    "VariantRules",
    "load_character",
    # Catalog
    "ContentCatalog",
    "InMemoryCatalog",
    # Rules
    "available_specialization_types",
    "toggle_selection",
    "start_boost_event",
    "apply_level_boosts",
    "finalize_skill_training",
    "AdHocSpellbookManager",
    "RankBonusSpellManager",
    "ESOTERIC_POLYMATH",
    "DEEP_LORE",
]
