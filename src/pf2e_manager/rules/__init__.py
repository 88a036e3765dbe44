"""Rules resolution for character building.

Submodules:
    eligibility: What a character can pick at a level
    prerequisites: Feat prerequisite checks
    selection: Cardinality and exclusion validators
    ability_boosts: Level-up ability boost events
    spellbooks: Spellbook and bonus-spell feature managers
    skill_training: Initial and Intelligence-bonus skill training
"""

from __future__ import annotations

from pf2e_manager.rules.ability_boosts import (
    LevelUpBoostEvent,
    apply_level_boosts,
    boost_increment,
    clear_level_boosts,
    current_scores,
    is_valid_boost_set,
    locked_abilities,
    preview_scores,
    required_boosts,
    start_boost_event,
)
from pf2e_manager.rules.eligibility import (
    available_specialization_types,
    boost_slots_at_level,
    eligible_feats,
    is_specialization_available,
    max_spell_rank_for,
)
from pf2e_manager.rules.prerequisites import (
    PrerequisiteResult,
    check_prerequisites,
    required_skill,
)
from pf2e_manager.rules.selection import (
    eligible_skill_choices,
    is_eligible_feat_choice,
    is_eligible_skill_choice,
    is_eligible_spell_choice,
    is_selectable,
    toggle_in_order,
    toggle_selection,
)
from pf2e_manager.rules.skill_training import (
    apply_selections,
    compute_slots,
    finalize_skill_training,
    int_bonus_skill_choices,
    int_bonus_skill_slots,
    overlapping_skills,
    set_int_bonus_skills,
    trainable_skill_set,
)
from pf2e_manager.rules.spellbooks import (
    DEEP_LORE,
    ESOTERIC_POLYMATH,
    AdHocSpellbookManager,
    RankBonusSpellManager,
    SpellbookFeature,
)


__all__ = [
    # Eligibility
    "available_specialization_types",
    "is_specialization_available",
    "boost_slots_at_level",
    "max_spell_rank_for",
    "eligible_feats",
    # Prerequisites
    "PrerequisiteResult",
    "check_prerequisites",
    "required_skill",
    # Selection
    "toggle_selection",
    "toggle_in_order",
    "is_selectable",
    "is_eligible_skill_choice",
    "eligible_skill_choices",
    "is_eligible_spell_choice",
    "is_eligible_feat_choice",
    # Ability boosts
    "boost_increment",
    "required_boosts",
    "current_scores",
    "preview_scores",
    "locked_abilities",
    "LevelUpBoostEvent",
    "start_boost_event",
    "is_valid_boost_set",
    "apply_level_boosts",
    "clear_level_boosts",
    # Spellbooks
    "SpellbookFeature",
    "ESOTERIC_POLYMATH",
    "DEEP_LORE",
    "AdHocSpellbookManager",
    "RankBonusSpellManager",
    # Skill training
    "compute_slots",
    "trainable_skill_set",
    "overlapping_skills",
    "apply_selections",
    "finalize_skill_training",
    "int_bonus_skill_slots",
    "int_bonus_skill_choices",
    "set_int_bonus_skills",
]
