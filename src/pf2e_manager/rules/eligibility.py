"""Eligibility rules engine.

Pure queries answering "what can this character pick right now": which
specialization tracks and options are unlocked at a level, how many ability
boosts a level grants under the active variant, and which feats are open.

The engine is class-agnostic. Level gates such as a track that only opens
at certain levels are carried by ``SpecializationAvailabilityRule`` data on
the catalog entries, so supporting a new class means adding data, not code.
"""

from __future__ import annotations

from pf2e_manager.catalog.accessor import ContentCatalog
from pf2e_manager.core.logging import get_logger
from pf2e_manager.models.catalog import FeatEntry, SpecializationType
from pf2e_manager.models.character import Character, VariantRules
from pf2e_manager.models.enums import FeatCategory
from pf2e_manager.models.progression import (
    ABILITY_BOOST_LEVELS,
    GRADUAL_BOOST_COUNT,
    STANDARD_BOOST_COUNT,
    gradual_block_for,
    max_castable_rank,
)
from pf2e_manager.rules.prerequisites import check_prerequisites


logger = get_logger(__name__)


# =============================================================================
# Specializations
# =============================================================================


def _filter_options(
    spec_type: SpecializationType,
    level: int,
    variant_rules: VariantRules | None,
) -> SpecializationType | None:
    """Narrow a specialization type to its open options, or drop it."""
    if not spec_type.availability.allows(level, variant_rules):
        return None
    options = tuple(
        option
        for option in spec_type.options
        if option.availability is None or option.availability.allows(level, variant_rules)
    )
    if not options:
        return None
    if len(options) == len(spec_type.options):
        return spec_type
    return spec_type.model_copy(update={"options": options})


def available_specialization_types(
    catalog: ContentCatalog,
    class_id: str,
    level: int,
    variant_rules: VariantRules | None = None,
) -> list[SpecializationType]:
    """Compute the specialization tracks selectable at a level.

    Each returned type carries only the options currently unlockable. A
    type whose own gate is closed, or that has no open option left, is
    dropped entirely.

    Args:
        catalog: Content catalog.
        class_id: The character's class id.
        level: Character level.
        variant_rules: Enabled variant rules.

    Returns:
        Selectable specialization types, in catalog order. Unknown class
        ids yield an empty list.
    """
    available: list[SpecializationType] = []
    for spec_type in catalog.get_specializations_for_class(class_id):
        filtered = _filter_options(spec_type, level, variant_rules)
        if filtered is not None:
            available.append(filtered)

    logger.debug(
        "Specializations resolved",
        class_id=class_id,
        level=level,
        types=[spec.id for spec in available],
    )
    return available


def is_specialization_available(
    catalog: ContentCatalog,
    class_id: str,
    specialization_type_id: str,
    level: int,
    variant_rules: VariantRules | None = None,
) -> bool:
    """Check whether one specialization track is selectable at a level."""
    return any(
        spec.id == specialization_type_id
        for spec in available_specialization_types(catalog, class_id, level, variant_rules)
    )


# =============================================================================
# Ability Boost Slots
# =============================================================================


def boost_slots_at_level(level: int, variant_rules: VariantRules | None = None) -> int:
    """Number of abilities boosted at a level-up event.

    Standard rules grant four boosts at levels 5, 10, 15 and 20. The
    gradual variant grants one boost at each level of its four blocks and
    none at level 1 or at the pause levels 6, 11 and 16.

    Args:
        level: The level being gained.
        variant_rules: Enabled variant rules.

    Returns:
        The number of boosts; 0 when the level grants none.
    """
    if variant_rules is not None and variant_rules.gradual_ability_boosts:
        return GRADUAL_BOOST_COUNT if gradual_block_for(level) is not None else 0
    return STANDARD_BOOST_COUNT if level in ABILITY_BOOST_LEVELS else 0


# =============================================================================
# Spellcasting
# =============================================================================


def max_spell_rank_for(character: Character) -> int:
    """Highest spell rank the character can cast."""
    return max_castable_rank(character.level)


# =============================================================================
# Feats
# =============================================================================


def eligible_feats(
    catalog: ContentCatalog,
    character: Character,
    category: FeatCategory | None = None,
    *,
    max_level: int | None = None,
) -> list[FeatEntry]:
    """List the feats a character could take in a slot.

    A feat is eligible when it matches the slot category, its level does
    not exceed the slot level, its prerequisites are met and the character
    has not already taken it.

    Args:
        catalog: Content catalog.
        character: The character choosing a feat.
        category: Slot category; None accepts every category.
        max_level: Slot level; defaults to the character's level.

    Returns:
        Eligible feats, in catalog order.
    """
    slot_level = character.level if max_level is None else max_level
    taken = {feat.feat_id for feat in character.feats}
    eligible: list[FeatEntry] = []
    for feat in catalog.get_feats():
        if category is not None and feat.category != category:
            continue
        if feat.level > slot_level or feat.id in taken:
            continue
        if not check_prerequisites(feat, character, catalog).met:
            continue
        eligible.append(feat)
    return eligible


__all__ = [
    "available_specialization_types",
    "is_specialization_available",
    "boost_slots_at_level",
    "max_spell_rank_for",
    "eligible_feats",
]
