"""Feat prerequisite checking.

Catalog prerequisites are free text. This module recognises the common
clause shapes and checks them against a character:

- "<rank> in <skill>" (e.g., "expert in Occultism"), compared with the
  proficiency order rather than by string
- "<ability> <score>" and "<ability> +<modifier>" (e.g., "Int +2")
- "<option> <tag>" naming a specialization (e.g., "enigma muse"), when a
  catalog is available to resolve the character's selections

Clauses that match none of these are treated as met, so an unusual
prerequisite never hides a feat.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pf2e_manager.models.enums import Ability, Proficiency


if TYPE_CHECKING:
    from pf2e_manager.catalog.accessor import ContentCatalog
    from pf2e_manager.models.catalog import FeatEntry
    from pf2e_manager.models.character import Character


_SKILL_RANK_PATTERN = re.compile(
    r"\b(untrained|trained|expert|master|legendary)\s+in\s+([a-z]+)",
    re.IGNORECASE,
)
_ABILITY_PATTERN = re.compile(
    r"\b(strength|str|dexterity|dex|constitution|con|intelligence|int|wisdom|wis|charisma|cha)"
    r"\s+(\+)?(\d+)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PrerequisiteResult:
    """Outcome of a prerequisite check.

    Attributes:
        met: Whether every prerequisite is satisfied.
        reasons: One entry per unmet prerequisite.
    """

    met: bool
    reasons: tuple[str, ...] = field(default_factory=tuple)


def _check_skill_rank(clause: str, character: Character) -> str | None:
    match = _SKILL_RANK_PATTERN.search(clause)
    if match is None:
        return None
    required = Proficiency(match.group(1).lower())
    skill_name = match.group(2).lower()
    if character.skill_proficiency(skill_name).at_least(required):
        return ""
    return f"Requires {required.value} in {skill_name}"


def _check_ability(clause: str, character: Character) -> str | None:
    match = _ABILITY_PATTERN.search(clause)
    if match is None:
        return None
    ability = Ability.parse(match.group(1))
    if ability is None:
        return None
    value = int(match.group(3))
    is_modifier = match.group(2) == "+"
    score = character.ability_scores.get(ability)
    # A modifier of +N corresponds to a score of 10 + 2N.
    required_score = 10 + value * 2 if is_modifier else value
    if score >= required_score:
        return ""
    shown = f"+{value}" if is_modifier else str(value)
    return f"Requires {ability.abbreviation.capitalize()} {shown}"


def _check_specialization(
    clause: str,
    character: Character,
    catalog: ContentCatalog,
) -> str | None:
    lowered = clause.lower()
    for spec_type in catalog.get_specializations_for_class(character.class_id):
        tag = spec_type.tag.lower()
        if not tag or re.search(rf"\b{re.escape(tag)}\b", lowered) is None:
            continue
        selected = [option for option in spec_type.options if option.id in character.specialization_ids]
        if any(option.name.lower() in lowered for option in selected):
            return ""
        return f"Requires {clause.strip()}"
    return None


def check_prerequisites(
    feat: FeatEntry,
    character: Character,
    catalog: ContentCatalog | None = None,
) -> PrerequisiteResult:
    """Check whether a character meets a feat's level and prerequisites.

    Args:
        feat: The feat being considered.
        character: The character considering it.
        catalog: Optional catalog used to resolve specialization clauses.

    Returns:
        The check outcome with a reason for each unmet requirement.
    """
    reasons: list[str] = []
    if character.level < feat.level:
        reasons.append(f"Requires level {feat.level}")

    for clause in feat.prerequisites:
        outcome = _check_skill_rank(clause, character)
        if outcome is None:
            outcome = _check_ability(clause, character)
        if outcome is None and catalog is not None:
            outcome = _check_specialization(clause, character, catalog)
        if outcome:
            reasons.append(outcome)

    return PrerequisiteResult(met=not reasons, reasons=tuple(reasons))


def required_skill(feat: FeatEntry) -> str | None:
    """Name of the skill a skill feat is tied to, from its prerequisites."""
    for clause in feat.prerequisites:
        match = _SKILL_RANK_PATTERN.search(clause)
        if match is not None and match.group(1).lower() != Proficiency.UNTRAINED:
            return match.group(2).lower()
    return None


__all__ = [
    "PrerequisiteResult",
    "check_prerequisites",
    "required_skill",
]
