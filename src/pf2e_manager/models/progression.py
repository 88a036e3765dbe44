"""Pathfinder 2e Level Progression Data.

This module contains the static leveling schedule:
- Feat slots, skill increases and ability boosts gained at each level
- The level blocks used by the gradual ability boost variant
- Maximum castable spell rank by level

All other modules read the schedule from here instead of hardcoding level
numbers.
"""

from __future__ import annotations

from dataclasses import dataclass

from pf2e_manager.models.enums import FeatCategory


MIN_CHARACTER_LEVEL = 1
MAX_CHARACTER_LEVEL = 20
MAX_SPELL_RANK = 10

# =============================================================================
# Ability Boosts
# =============================================================================

ABILITY_BOOST_LEVELS: tuple[int, ...] = (5, 10, 15, 20)
"""Levels granting ability boosts under the standard rules."""

STANDARD_BOOST_COUNT = 4
"""Distinct abilities boosted at each standard boost level."""

GRADUAL_BOOST_COUNT = 1
"""Abilities boosted at each gradual boost level."""

BOOST_SOFT_CAP = 18
"""Scores at or above this gain +1 from a boost instead of +2."""

GRADUAL_BOOST_BLOCKS: tuple[tuple[int, ...], ...] = (
    (2, 3, 4, 5),
    (7, 8, 9, 10),
    (12, 13, 14, 15),
    (17, 18, 19, 20),
)
"""Level blocks of the gradual variant; no ability twice within a block."""

GRADUAL_PAUSE_LEVELS: tuple[int, ...] = (6, 11, 16)
"""Levels between gradual blocks that grant no boost."""


def gradual_block_for(level: int) -> tuple[int, ...] | None:
    """Get the gradual boost block containing a level, or None."""
    for block in GRADUAL_BOOST_BLOCKS:
        if level in block:
            return block
    return None


def ability_boost_levels_up_to(level: int, *, gradual: bool = False) -> list[int]:
    """Get every boost-granting level up to and including ``level``."""
    if gradual:
        return [lvl for block in GRADUAL_BOOST_BLOCKS for lvl in block if lvl <= level]
    return [lvl for lvl in ABILITY_BOOST_LEVELS if lvl <= level]


# =============================================================================
# Feats and Skill Increases
# =============================================================================

SKILL_INCREASE_LEVELS: tuple[int, ...] = (3, 5, 7, 9, 11, 13, 15, 17, 19)


@dataclass(frozen=True)
class LevelFeatures:
    """What a single level grants.

    Attributes:
        ancestry_feat: Grants an ancestry feat slot.
        class_feat: Grants a class feat slot.
        general_feat: Grants a general feat slot.
        skill_feat: Grants a skill feat slot.
        skill_increase: Grants a skill increase.
        ability_boost: Grants standard ability boosts.
    """

    ancestry_feat: bool = False
    class_feat: bool = False
    general_feat: bool = False
    skill_feat: bool = False
    skill_increase: bool = False
    ability_boost: bool = False


def _build_level_features() -> dict[int, LevelFeatures]:
    features: dict[int, LevelFeatures] = {}
    for level in range(MIN_CHARACTER_LEVEL, MAX_CHARACTER_LEVEL + 1):
        features[level] = LevelFeatures(
            ancestry_feat=level == 1 or level % 4 == 1,
            class_feat=level == 1 or level % 2 == 0,
            general_feat=level % 4 == 3,
            skill_feat=level % 2 == 0,
            skill_increase=level in SKILL_INCREASE_LEVELS,
            ability_boost=level in ABILITY_BOOST_LEVELS,
        )
    return features


LEVEL_FEATURES: dict[int, LevelFeatures] = _build_level_features()
"""Complete feat/increase/boost schedule for levels 1-20."""


def features_at_level(level: int) -> LevelFeatures:
    """Get what a level grants; levels outside 1-20 grant nothing."""
    return LEVEL_FEATURES.get(level, LevelFeatures())


def feat_slots_up_to_level(level: int) -> list[tuple[FeatCategory, int]]:
    """Get every (category, level) feat slot up to and including ``level``."""
    slots: list[tuple[FeatCategory, int]] = []
    for lvl in range(MIN_CHARACTER_LEVEL, min(level, MAX_CHARACTER_LEVEL) + 1):
        features = LEVEL_FEATURES[lvl]
        if features.ancestry_feat:
            slots.append((FeatCategory.ANCESTRY, lvl))
        if features.class_feat:
            slots.append((FeatCategory.CLASS, lvl))
        if features.general_feat:
            slots.append((FeatCategory.GENERAL, lvl))
        if features.skill_feat:
            slots.append((FeatCategory.SKILL, lvl))
    return slots


def skill_increases_up_to_level(level: int) -> int:
    """Count skill increases gained up to and including ``level``."""
    return sum(1 for lvl in SKILL_INCREASE_LEVELS if lvl <= level)


# =============================================================================
# Spellcasting
# =============================================================================


def max_castable_rank(level: int) -> int:
    """Highest spell rank a full caster can cast at a level.

    A new rank is gained at every odd level: rank 1 at level 1, rank 2 at
    level 3, up to rank 10 at level 19.
    """
    if level < MIN_CHARACTER_LEVEL:
        return 0
    return min((level + 1) // 2, MAX_SPELL_RANK)


__all__ = [
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "MAX_SPELL_RANK",
    "ABILITY_BOOST_LEVELS",
    "STANDARD_BOOST_COUNT",
    "GRADUAL_BOOST_COUNT",
    "BOOST_SOFT_CAP",
    "GRADUAL_BOOST_BLOCKS",
    "GRADUAL_PAUSE_LEVELS",
    "gradual_block_for",
    "ability_boost_levels_up_to",
    "SKILL_INCREASE_LEVELS",
    "LevelFeatures",
    "LEVEL_FEATURES",
    "features_at_level",
    "feat_slots_up_to_level",
    "skill_increases_up_to_level",
    "max_castable_rank",
]
