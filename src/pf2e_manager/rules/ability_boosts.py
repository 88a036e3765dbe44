"""Ability boost resolver for level-up events.

Each boost-granting level is an event that moves through
``NotStarted -> InProgress -> Complete``:

- Standard rules: four distinct abilities at levels 5, 10, 15 and 20.
- Gradual variant: one ability at each level of the blocks 2-5, 7-10,
  12-15 and 17-20, none at the pause levels 6, 11 and 16, plus a
  repetition constraint chosen by configuration (``block`` or ``rolling``).

A boost adds +2 to a score below 18 and +1 to a score of 18 or more.
Applying boosts is reversible: the scores "before" a level are recomputed by
removing that level's recorded boosts, so re-applying the same selection at
the same level always reproduces the same scores.

Example:
    >>> event = start_boost_event(character, 5)
    >>> for ability in (Ability.STR, Ability.DEX, Ability.CON, Ability.WIS):
    ...     event = event.toggle(ability)
    >>> event.state
    <BoostEventState.COMPLETE: 'complete'>
    >>> character = apply_level_boosts(character, 5, event.selections)
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from pf2e_manager.core.config import get_settings
from pf2e_manager.core.logging import get_logger
from pf2e_manager.models.character import AbilityScores, Character
from pf2e_manager.models.enums import Ability, BoostEventState, BoostRepetitionRule
from pf2e_manager.models.progression import BOOST_SOFT_CAP, gradual_block_for
from pf2e_manager.rules.eligibility import boost_slots_at_level
from pf2e_manager.rules.selection import is_selectable, toggle_in_order
from pf2e_manager.rules.skill_training import trim_int_bonus_skills


logger = get_logger(__name__)


# =============================================================================
# Score Arithmetic
# =============================================================================


def boost_increment(score: int) -> int:
    """Points a single boost adds to a score: +2 below 18, +1 from 18 up."""
    return 1 if score >= BOOST_SOFT_CAP else 2


def _unboost_decrement(score: int) -> int:
    # 19 is reachable from 17 (+2) and 18 (+1); stepping back to 18 keeps
    # boost_increment(score - decrement) + (score - decrement) == score.
    return 1 if score > BOOST_SOFT_CAP else 2


def _normalize(selections: Iterable[Ability]) -> tuple[Ability, ...]:
    return tuple(dict.fromkeys(Ability(ability) for ability in selections))


def required_boosts(character: Character, level: int) -> int:
    """Number of abilities the character boosts at a level."""
    return boost_slots_at_level(level, character.variant_rules)


def current_scores(character: Character, level: int) -> AbilityScores:
    """Ability scores before a level's recorded boosts.

    Args:
        character: The character.
        level: The level-up event.

    Returns:
        The character's scores with that level's boosts removed. Recorded
        increments are subtracted exactly; boosts without a record step back
        by the inverse of the increment.
    """
    recorded = character.ability_boost_increments.get(level, {})
    scores = character.ability_scores
    for ability in character.ability_boosts.get(level, ()):
        score = scores.get(ability)
        decrement = recorded.get(ability, _unboost_decrement(score))
        scores = scores.with_score(ability, max(1, score - decrement))
    return scores


def _boost(scores: AbilityScores, selections: Iterable[Ability]) -> tuple[AbilityScores, dict[Ability, int]]:
    increments: dict[Ability, int] = {}
    for ability in _normalize(selections):
        score = scores.get(ability)
        increments[ability] = boost_increment(score)
        scores = scores.with_score(ability, score + increments[ability])
    return scores, increments


def preview_scores(
    character: Character,
    level: int,
    selections: Iterable[Ability],
) -> AbilityScores:
    """Ability scores after applying a selection at a level.

    Args:
        character: The character.
        level: The level-up event.
        selections: Abilities to boost; duplicates are ignored.

    Returns:
        The "before" scores of the level with the selection applied.
    """
    scores, _ = _boost(current_scores(character, level), selections)
    return scores


# =============================================================================
# Gradual Repetition Constraint
# =============================================================================


def locked_abilities(
    character: Character,
    level: int,
    *,
    rule: BoostRepetitionRule | None = None,
    window: int | None = None,
) -> frozenset[Ability]:
    """Abilities that may not be boosted at a level.

    Only the gradual variant locks abilities. The ``block`` rule locks
    every ability boosted at another level of the same block. The
    ``rolling`` rule locks the ``window`` most recently boosted distinct
    abilities from earlier levels.

    Args:
        character: The character.
        level: The level-up event.
        rule: Repetition rule; defaults to the configured rule.
        window: Rolling window size; defaults to the configured size.

    Returns:
        The locked abilities.
    """
    if not character.variant_rules.gradual_ability_boosts:
        return frozenset()

    rules_settings = get_settings().rules
    rule = rule or rules_settings.gradual_boost_repetition
    window = window or rules_settings.gradual_boost_window

    if rule == BoostRepetitionRule.BLOCK:
        block = gradual_block_for(level)
        if block is None:
            return frozenset()
        return frozenset(
            ability
            for other_level in block
            if other_level != level
            for ability in character.ability_boosts.get(other_level, ())
        )

    recent: list[Ability] = []
    for earlier_level in sorted((lvl for lvl in character.ability_boosts if lvl < level), reverse=True):
        for ability in reversed(character.ability_boosts[earlier_level]):
            if ability not in recent:
                recent.append(ability)
            if len(recent) >= window:
                return frozenset(recent)
    return frozenset(recent)


# =============================================================================
# Level-up Boost Event
# =============================================================================


class LevelUpBoostEvent(BaseModel):
    """In-progress selection for one level-up boost event.

    The event is held by the caller while the player chooses; it is never
    written into the character until ``apply_level_boosts`` is called.

    Attributes:
        level: The level being gained.
        required: Number of abilities to boost.
        selections: Abilities chosen so far, in selection order.
        locked: Abilities the repetition constraint forbids.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: int = Field(ge=1, le=20)
    required: int = Field(ge=0)
    selections: tuple[Ability, ...] = ()
    locked: frozenset[Ability] = frozenset()

    @property
    def state(self) -> BoostEventState:
        """Where the event is in its lifecycle."""
        if not self.selections:
            return BoostEventState.NOT_STARTED
        if self.is_complete:
            return BoostEventState.COMPLETE
        return BoostEventState.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        """Whether exactly the required number of abilities is selected."""
        return self.required > 0 and len(self.selections) == self.required

    def can_select(self, ability: Ability) -> bool:
        """Whether the control for an ability should be enabled."""
        if ability in self.selections:
            return True
        if self.required == 0 or ability in self.locked:
            return False
        return is_selectable(self.selections, ability, self.required)

    def toggle(self, ability: Ability) -> "LevelUpBoostEvent":
        """Select or deselect an ability.

        Locked abilities and additions beyond the required count are
        ignored; the event is returned unchanged. A selected ability is
        always deselected, including in a one-slot event, where any other
        ability replaces the selection.
        """
        if ability in self.selections:
            return self.model_copy(update={"selections": tuple(a for a in self.selections if a != ability)})
        if not self.can_select(ability):
            logger.debug("Boost toggle ignored", level=self.level, ability=ability)
            return self
        selections = toggle_in_order(self.selections, ability, self.required)
        return self.model_copy(update={"selections": tuple(Ability(a) for a in selections)})


def start_boost_event(
    character: Character,
    level: int,
    *,
    rule: BoostRepetitionRule | None = None,
    window: int | None = None,
) -> LevelUpBoostEvent:
    """Open a boost event seeded with the level's existing selections."""
    return LevelUpBoostEvent(
        level=level,
        required=required_boosts(character, level),
        selections=tuple(character.ability_boosts.get(level, ())),
        locked=locked_abilities(character, level, rule=rule, window=window),
    )


# =============================================================================
# Resolution
# =============================================================================


def is_valid_boost_set(
    character: Character,
    level: int,
    selections: Iterable[Ability],
    *,
    rule: BoostRepetitionRule | None = None,
    window: int | None = None,
) -> bool:
    """Check a complete boost selection for a level.

    The level must be a reached level-up that grants boosts, the selection
    must hold exactly the required number of distinct abilities, and none
    may be locked by the repetition constraint.
    """
    if not 2 <= level <= character.level:
        return False
    required = required_boosts(character, level)
    if required == 0:
        return False
    chosen = list(selections)
    distinct = _normalize(chosen)
    if len(distinct) != len(chosen) or len(distinct) != required:
        return False
    locked = locked_abilities(character, level, rule=rule, window=window)
    return not locked.intersection(distinct)


def apply_level_boosts(
    character: Character,
    level: int,
    selections: Iterable[Ability],
    *,
    rule: BoostRepetitionRule | None = None,
    window: int | None = None,
) -> Character:
    """Apply a level's ability boosts to the character.

    Any boosts previously recorded for the level are removed first, so
    editing a level replaces its boosts instead of stacking them.

    Args:
        character: The character.
        level: The level-up event.
        selections: Abilities to boost.
        rule: Repetition rule; defaults to the configured rule.
        window: Rolling window size; defaults to the configured size.

    Returns:
        The updated character, or the input unchanged when the selection
        is not valid for the level.
    """
    chosen = list(selections)
    if not is_valid_boost_set(character, level, chosen, rule=rule, window=window):
        logger.debug("Boost selection rejected", level=level, selections=chosen)
        return character

    boosts = _normalize(chosen)
    scores, increments = _boost(current_scores(character, level), boosts)
    updated = character.model_copy(
        update={
            "ability_scores": scores,
            "ability_boosts": {**character.ability_boosts, level: boosts},
            "ability_boost_increments": {**character.ability_boost_increments, level: increments},
        }
    )
    updated = trim_int_bonus_skills(updated, level)
    logger.info("Boosts applied", level=level, abilities=[a.value for a in boosts])
    return updated


def clear_level_boosts(character: Character, level: int) -> Character:
    """Remove a level's recorded boosts and reverse their score changes."""
    if level not in character.ability_boosts:
        return character
    boosts = {lvl: abilities for lvl, abilities in character.ability_boosts.items() if lvl != level}
    updated = character.model_copy(
        update={
            "ability_scores": current_scores(character, level),
            "ability_boosts": boosts,
            "ability_boost_increments": {
                lvl: increments
                for lvl, increments in character.ability_boost_increments.items()
                if lvl != level
            },
        }
    )
    logger.info("Boosts cleared", level=level)
    return trim_int_bonus_skills(updated, level)


__all__ = [
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
]
