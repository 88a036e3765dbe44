"""Skill training resolver.

Covers initial skill training at character creation and the extra trained
skill granted by each Intelligence boost taken at a level-up.

Initial training slots are the class base plus the Intelligence modifier
(a negative modifier never removes base slots). Manual picks may only come
from skills no automatic source already trains: the class, the background,
or a substitute skill chosen because the class and background overlapped.

Example:
    >>> compute_slots(2, 1)
    3
    >>> apply_selections(["acrobatics", "arcana", "crafting", "deception"], 3)
    ('acrobatics', 'arcana', 'crafting')
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pf2e_manager.catalog.accessor import ContentCatalog
from pf2e_manager.core.config import get_settings
from pf2e_manager.core.logging import get_logger
from pf2e_manager.models.character import Character, SkillProficiency
from pf2e_manager.models.enums import Ability, Proficiency, SkillOverflowPolicy
from pf2e_manager.rules.selection import eligible_skill_choices


logger = get_logger(__name__)


# =============================================================================
# Slot Arithmetic
# =============================================================================


def compute_slots(class_base_slots: int, intelligence_modifier: int) -> int:
    """Total manual skill-training slots at character creation."""
    return class_base_slots + max(0, intelligence_modifier)


def trainable_skill_set(
    all_skills: Iterable[str],
    auto_trained_by_class: Iterable[str],
    granted_by_background: Iterable[str] = (),
    granted_by_bonus_choice: Iterable[str] = (),
) -> list[str]:
    """Skills a player may still pick manually.

    Args:
        all_skills: Every skill name in the catalog.
        auto_trained_by_class: Skills the class trains automatically.
        granted_by_background: Skills the background trains.
        granted_by_bonus_choice: Substitute skills already picked for an
            overlap between class and background.

    Returns:
        The skill names not covered by any automatic source, in catalog
        order (case-insensitive comparison).
    """
    covered = [*auto_trained_by_class, *granted_by_background, *granted_by_bonus_choice]
    return eligible_skill_choices(all_skills, covered)


def overlapping_skills(
    class_skills: Iterable[str],
    background_skills: Iterable[str],
) -> list[str]:
    """Background skills the class already trains.

    Each overlap entitles the character to one substitute trained skill.
    """
    class_set = {name.lower() for name in class_skills}
    return [name for name in dict.fromkeys(background_skills) if name.lower() in class_set]


def apply_selections(
    selected: Iterable[str],
    total_slots: int,
    *,
    policy: SkillOverflowPolicy | None = None,
) -> tuple[str, ...] | None:
    """Fit a manual selection into the slot budget.

    Duplicates are dropped first (case-insensitive, first spelling wins).
    An over-count is then either truncated to the first ``total_slots``
    entries in selection order or rejected outright.

    Args:
        selected: Skill names in selection order.
        total_slots: Available slots.
        policy: Over-limit policy; defaults to the configured policy.

    Returns:
        The accepted selection, or None when the policy rejects it.
    """
    policy = policy or get_settings().rules.skill_overflow_policy
    seen: set[str] = set()
    unique: list[str] = []
    for name in selected:
        if name.lower() not in seen:
            seen.add(name.lower())
            unique.append(name)

    if len(unique) <= total_slots:
        return tuple(unique)
    if policy == SkillOverflowPolicy.REJECT:
        logger.debug("Skill selection over limit", selected=len(unique), slots=total_slots)
        return None
    return tuple(unique[: max(0, total_slots)])


# =============================================================================
# Character Updates
# =============================================================================


def _train(
    skills: tuple[SkillProficiency, ...],
    names: Iterable[str],
    abilities: Mapping[str, Ability],
) -> tuple[SkillProficiency, ...]:
    """Raise skills to trained, never lowering a higher rank."""
    updated = list(skills)
    index = {skill.name.lower(): position for position, skill in enumerate(updated)}
    for name in names:
        key = name.lower()
        position = index.get(key)
        if position is None:
            index[key] = len(updated)
            updated.append(
                SkillProficiency(
                    name=name,
                    ability=abilities.get(key, Ability.INT),
                    proficiency=Proficiency.TRAINED,
                )
            )
        elif not updated[position].proficiency.at_least(Proficiency.TRAINED):
            updated[position] = updated[position].model_copy(update={"proficiency": Proficiency.TRAINED})
    return tuple(updated)


def _untrain(skills: tuple[SkillProficiency, ...], names: Iterable[str]) -> tuple[SkillProficiency, ...]:
    """Drop skills that are exactly trained back to untrained."""
    targets = {name.lower() for name in names}
    return tuple(
        skill.model_copy(update={"proficiency": Proficiency.UNTRAINED})
        if skill.name.lower() in targets and skill.proficiency == Proficiency.TRAINED
        else skill
        for skill in skills
    )


def finalize_skill_training(
    character: Character,
    catalog: ContentCatalog,
    selected: Iterable[str],
    *,
    background_skills: Iterable[str] = (),
    bonus_skills: Iterable[str] = (),
    policy: SkillOverflowPolicy | None = None,
) -> Character:
    """Write the initial skill training into the character.

    Every catalog skill ends up on the sheet. Skills trained by the class,
    the background, an overlap substitute or a manual pick are raised to
    trained; a skill already at expert or above keeps its rank. Manual
    picks that an automatic source already covers are ignored.

    Finalizing again rebuilds the training: a skill that is exactly trained
    but no longer granted, picked or recorded as an Intelligence bonus goes
    back to untrained.

    Args:
        character: The character.
        catalog: Content catalog.
        selected: Manual picks, in selection order.
        background_skills: Skills trained by the background.
        bonus_skills: Substitute skills picked for class/background overlaps.
        policy: Over-limit policy; defaults to the configured policy.

    Returns:
        The updated character, or the input unchanged when the class is
        unknown or the selection is rejected.
    """
    class_entry = catalog.get_class_by_id(character.class_id)
    if class_entry is None:
        logger.debug("Skill training skipped, unknown class", class_id=character.class_id)
        return character

    background_skills = tuple(background_skills)
    bonus_skills = tuple(bonus_skills)
    definitions = catalog.get_skills_catalog()
    trainable = trainable_skill_set(
        [definition.name for definition in definitions],
        class_entry.trained_skills,
        background_skills,
        bonus_skills,
    )
    trainable_keys = {name.lower() for name in trainable}
    picks = [name for name in selected if name.lower() in trainable_keys]

    slots = compute_slots(class_entry.additional_trained_skills, character.modifier(Ability.INT))
    accepted = apply_selections(picks, slots, policy=policy)
    if accepted is None:
        return character

    abilities = {definition.name.lower(): definition.ability for definition in definitions}
    listed = {skill.name.lower() for skill in character.skills}
    skills = character.skills + tuple(
        SkillProficiency(name=definition.name, ability=definition.ability)
        for definition in definitions
        if definition.name.lower() not in listed
    )
    granted = [*class_entry.trained_skills, *background_skills, *bonus_skills, *accepted]
    kept = {name.lower() for name in granted} | {
        name.lower() for names in character.int_bonus_skills.values() for name in names
    }
    skills = _untrain(skills, [skill.name for skill in skills if skill.name.lower() not in kept])
    skills = _train(skills, granted, abilities)

    logger.info(
        "Skill training finalized",
        character_id=str(character.id),
        slots=slots,
        selected=list(accepted),
    )
    return character.model_copy(update={"skills": skills})


# =============================================================================
# Intelligence Bonus Skills
# =============================================================================


def int_bonus_skill_slots(character: Character, level: int) -> int:
    """Extra trained skills from Intelligence boosts taken at a level."""
    return sum(1 for ability in character.ability_boosts.get(level, ()) if ability == Ability.INT)


def int_bonus_skill_choices(character: Character, level: int) -> list[str]:
    """Skills selectable for a level's Intelligence bonus.

    Untrained skills are open, as are the skills already recorded for this
    level so the current picks stay visible.
    """
    recorded = {name.lower() for name in character.int_bonus_skills.get(level, ())}
    return [
        skill.name
        for skill in character.skills
        if skill.proficiency == Proficiency.UNTRAINED or skill.name.lower() in recorded
    ]


def set_int_bonus_skills(
    character: Character,
    level: int,
    skills: Iterable[str],
    *,
    policy: SkillOverflowPolicy | None = None,
) -> Character:
    """Record and train the skills picked for a level's Intelligence bonus.

    Skills recorded earlier for the same level and no longer picked are
    returned to untrained.

    Args:
        character: The character.
        level: The level-up event.
        skills: Picked skill names.
        policy: Over-limit policy; defaults to the configured policy.

    Returns:
        The updated character, or the input unchanged when the level has no
        Intelligence boost, a pick is not selectable, or the policy rejects
        an over-count.
    """
    slots = int_bonus_skill_slots(character, level)
    if slots == 0:
        logger.debug("No Intelligence bonus at level", level=level)
        return character

    choices = {name.lower() for name in int_bonus_skill_choices(character, level)}
    picks = list(skills)
    if any(name.lower() not in choices for name in picks):
        logger.debug("Intelligence bonus pick not selectable", level=level, skills=picks)
        return character

    accepted = apply_selections(picks, slots, policy=policy)
    if accepted is None:
        return character

    previous = character.int_bonus_skills.get(level, ())
    accepted_keys = {name.lower() for name in accepted}
    updated_skills = _untrain(character.skills, [name for name in previous if name.lower() not in accepted_keys])
    updated_skills = _train(updated_skills, accepted, {})

    records = {lvl: names for lvl, names in character.int_bonus_skills.items() if lvl != level}
    if accepted:
        records[level] = accepted

    logger.info("Intelligence bonus skills set", level=level, skills=list(accepted))
    return character.model_copy(update={"skills": updated_skills, "int_bonus_skills": records})


def trim_int_bonus_skills(character: Character, level: int) -> Character:
    """Drop Intelligence bonus skills that a level's boosts no longer pay for.

    Called after a level's boosts change. Dropped skills return to
    untrained.
    """
    recorded = character.int_bonus_skills.get(level, ())
    slots = int_bonus_skill_slots(character, level)
    if len(recorded) <= slots:
        return character

    kept = recorded[:slots]
    records = {lvl: names for lvl, names in character.int_bonus_skills.items() if lvl != level}
    if kept:
        records[level] = kept

    logger.info("Intelligence bonus skills trimmed", level=level, dropped=list(recorded[slots:]))
    return character.model_copy(
        update={
            "skills": _untrain(character.skills, recorded[slots:]),
            "int_bonus_skills": records,
        }
    )


__all__ = [
    "compute_slots",
    "trainable_skill_set",
    "overlapping_skills",
    "apply_selections",
    "finalize_skill_training",
    "int_bonus_skill_slots",
    "int_bonus_skill_choices",
    "set_int_bonus_skills",
    "trim_int_bonus_skills",
]
