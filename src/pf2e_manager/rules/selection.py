"""Selection validators for single- and multi-select choices.

These functions enforce cardinality and "already trained/known/taken"
exclusion. They re-check what the UI already enforces: an over-limit
or ineligible choice is a no-op that returns the current selection, never
an error, so repeated calls are idempotent.

Example:
    >>> sorted(toggle_selection(frozenset({"a", "b"}), "c", 2))
    ['a', 'b']
    >>> toggle_selection(frozenset({"a"}), "b", 1)
    frozenset({'b'})
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pf2e_manager.core.logging import get_logger


if TYPE_CHECKING:
    from pf2e_manager.models.character import Character


logger = get_logger(__name__)


# =============================================================================
# Cardinality
# =============================================================================


def toggle_in_order(
    current: Iterable[str],
    candidate_id: str,
    max_selections: int,
) -> tuple[str, ...]:
    """Toggle a candidate in an ordered selection.

    Single-select (``max_selections == 1``) always replaces the selection
    with the candidate. Multi-select removes the candidate if present, adds
    it at the end if under the cap, and otherwise leaves the selection as it
    is.

    Args:
        current: Current selection, in selection order.
        candidate_id: The id being toggled.
        max_selections: Maximum number of selected ids.

    Returns:
        The new selection, in selection order.
    """
    selected = tuple(dict.fromkeys(current))
    if max_selections <= 1:
        return (candidate_id,)
    if candidate_id in selected:
        return tuple(item for item in selected if item != candidate_id)
    if len(selected) < max_selections:
        return (*selected, candidate_id)
    logger.debug(
        "Selection at capacity",
        candidate_id=candidate_id,
        max_selections=max_selections,
    )
    return selected


def toggle_selection(
    current: Iterable[str],
    candidate_id: str,
    max_selections: int,
) -> frozenset[str]:
    """Toggle a candidate in an unordered selection.

    Same rules as ``toggle_in_order``. Toggling the same id twice in
    multi-select mode restores the original selection, and the result never
    holds more than ``max_selections`` ids.

    Args:
        current: Current selection.
        candidate_id: The id being toggled.
        max_selections: Maximum number of selected ids.

    Returns:
        The new selection.
    """
    return frozenset(toggle_in_order(current, candidate_id, max_selections))


def is_selectable(current: Iterable[str], candidate_id: str, max_selections: int) -> bool:
    """Whether the UI control for a candidate should be enabled.

    A selected candidate can always be deselected; an unselected one can
    be picked when under the cap or in single-select mode.
    """
    selected = set(current)
    if candidate_id in selected or max_selections <= 1:
        return True
    return len(selected) < max_selections


# =============================================================================
# Exclusion
# =============================================================================


def is_eligible_skill_choice(
    skill_name: str,
    already_trained: Iterable[str],
    excluded_skill: str | None = None,
) -> bool:
    """Check whether a skill may be picked as a substitute training.

    Args:
        skill_name: Candidate skill.
        already_trained: Skills already trained by non-choice sources.
        excluded_skill: The overlapping skill that triggered the choice.

    Returns:
        True if the skill is neither already trained nor the excluded one.
    """
    target = skill_name.lower()
    if excluded_skill is not None and target == excluded_skill.lower():
        return False
    return target not in {name.lower() for name in already_trained}


def eligible_skill_choices(
    all_skills: Iterable[str],
    already_trained: Iterable[str],
    excluded_skill: str | None = None,
) -> list[str]:
    """Filter a skill list down to the eligible substitute choices."""
    trained = {name.lower() for name in already_trained}
    excluded = excluded_skill.lower() if excluded_skill is not None else None
    return [
        name
        for name in all_skills
        if name.lower() not in trained and name.lower() != excluded
    ]


def is_eligible_spell_choice(
    spell_id: str,
    known_spell_ids: Iterable[str],
    chosen_spell_ids: Iterable[str] = (),
) -> bool:
    """Check that a spell is neither already known nor already chosen."""
    return spell_id not in set(known_spell_ids) and spell_id not in set(chosen_spell_ids)


def is_eligible_feat_choice(feat_id: str, character: Character) -> bool:
    """Check that a feat has not already been taken by the character."""
    return not character.has_feat([feat_id])


__all__ = [
    "toggle_in_order",
    "toggle_selection",
    "is_selectable",
    "is_eligible_skill_choice",
    "eligible_skill_choices",
    "is_eligible_spell_choice",
    "is_eligible_feat_choice",
]
