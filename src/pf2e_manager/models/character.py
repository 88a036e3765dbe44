"""Pydantic V2 schemas for the character snapshot.

The Character is the single source of truth for a sheet. Every model here
is frozen: rules resolvers never mutate a character, they return a new
value built with ``model_copy(update=...)``.

Example:
    >>> character = Character(name="Lyra", class_id="bard", level=3)
    >>> character.modifier(Ability.CHA)
    0
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from pf2e_manager.core.exceptions import InvalidCharacterError
from pf2e_manager.models.enums import Ability, FeatCategory, Proficiency


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    Example:
        >>> calculate_modifier(18)
        4
        >>> calculate_modifier(9)
        -1
    """
    return (score - 10) // 2


AbilityScore = Annotated[int, Field(ge=1, le=30, description="Ability score (1-30)")]


# =============================================================================
# Components
# =============================================================================


class AbilityScores(BaseModel):
    """The six ability scores of a character."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: AbilityScore = 10
    dexterity: AbilityScore = 10
    constitution: AbilityScore = 10
    intelligence: AbilityScore = 10
    wisdom: AbilityScore = 10
    charisma: AbilityScore = 10

    def get(self, ability: Ability) -> int:
        """Get the score for a specific ability."""
        return getattr(self, ability.value)

    def modifier(self, ability: Ability) -> int:
        """Get the modifier for a specific ability."""
        return calculate_modifier(self.get(ability))

    def with_score(self, ability: Ability, score: int) -> "AbilityScores":
        """Return a copy with one ability set to a new score."""
        return self.model_copy(update={ability.value: score})

    def as_dict(self) -> dict[Ability, int]:
        """Return the scores keyed by Ability."""
        return {ability: self.get(ability) for ability in Ability}


class SkillProficiency(BaseModel):
    """A skill on the sheet and its current proficiency rank."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    ability: Ability
    proficiency: Proficiency = Proficiency.UNTRAINED


class CharacterFeat(BaseModel):
    """A feat taken by the character.

    Attributes:
        feat_id: Catalog identifier of the feat.
        level: Level at which the feat was acquired.
        source: Feat slot category it was taken in.
        choices: Sub-choices made for the feat (e.g., a chosen skill).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    feat_id: str = Field(min_length=1)
    level: int = Field(default=1, ge=1, le=20)
    source: FeatCategory
    choices: dict[str, str] = Field(default_factory=dict)


class VariantRules(BaseModel):
    """Optional ruleset toggles (Gamemastery Guide variants)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    free_archetype: bool = False
    dual_class: bool = False
    ancestry_paragon: bool = False
    automatic_bonus_progression: bool = False
    gradual_ability_boosts: bool = False
    proficiency_without_level: bool = False

    def is_enabled(self, name: str) -> bool:
        """Check a variant rule by field name; unknown names are disabled."""
        return name in type(self).model_fields and bool(getattr(self, name))


# =============================================================================
# Spellbook Sub-state
# =============================================================================


class AdHocSpellbook(BaseModel):
    """A spellbook that spells are added to and removed from one at a time.

    Attributes:
        spell_ids: Learned spells, in the order they were added.
        daily_preparation: The one spell prepared for the day, always a
            member of ``spell_ids`` when set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["adhoc"] = "adhoc"
    spell_ids: tuple[str, ...] = ()
    daily_preparation: str | None = None


class RankBonusSpells(BaseModel):
    """One extra chosen spell per spell rank.

    Attributes:
        extra_spells: Spell rank mapped to the chosen spell id.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["rank_bonus"] = "rank_bonus"
    extra_spells: dict[int, str] = Field(default_factory=dict)


SpellbookState = Annotated[
    Union[AdHocSpellbook, RankBonusSpells],
    Field(discriminator="kind"),
]


# =============================================================================
# Character
# =============================================================================


class Character(BaseModel):
    """Character snapshot.

    Attributes:
        id: Unique character identifier.
        name: Character name.
        class_id: Catalog id of the character's class.
        level: Character level (1-20).
        ability_scores: Current ability scores with all boosts applied.
        ability_boosts: Level-up boost history, level mapped to the
            abilities boosted at that level.
        ability_boost_increments: Points each boost added at a level, used
            to reverse that level exactly.
        variant_rules: Enabled variant rules.
        skills: Skill proficiencies.
        feats: Feats taken.
        specialization_ids: Selected specialization option ids.
        known_spells: Spell repertoire (spell ids).
        signature_spells: Spells that can be freely heightened.
        spellbook: Feature name mapped to that feature's spellbook state.
        int_bonus_skills: Level mapped to skills trained from an
            Intelligence boost taken at that level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    name: str = Field(default="", max_length=100, description="Character name")
    class_id: str = Field(default="", description="Class catalog id")
    level: int = Field(default=1, ge=1, le=20, description="Character level")
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    ability_boosts: dict[int, tuple[Ability, ...]] = Field(default_factory=dict)
    ability_boost_increments: dict[int, dict[Ability, int]] = Field(default_factory=dict)
    variant_rules: VariantRules = Field(default_factory=VariantRules)
    skills: tuple[SkillProficiency, ...] = ()
    feats: tuple[CharacterFeat, ...] = ()
    specialization_ids: tuple[str, ...] = ()
    known_spells: tuple[str, ...] = ()
    signature_spells: tuple[str, ...] = ()
    spellbook: dict[str, SpellbookState] = Field(default_factory=dict)
    int_bonus_skills: dict[int, tuple[str, ...]] = Field(default_factory=dict)

    def has_feat(self, feat_ids: Iterable[str]) -> bool:
        """Check whether any of the given feat ids has been taken."""
        wanted = set(feat_ids)
        return any(feat.feat_id in wanted for feat in self.feats)

    def skill_proficiency(self, skill_name: str) -> Proficiency:
        """Get the proficiency in a skill, untrained if absent (case-insensitive)."""
        target = skill_name.lower()
        for skill in self.skills:
            if skill.name.lower() == target:
                return skill.proficiency
        return Proficiency.UNTRAINED

    def trained_skill_names(self) -> set[str]:
        """Lower-cased names of every skill at trained or better."""
        return {
            skill.name.lower()
            for skill in self.skills
            if skill.proficiency.at_least(Proficiency.TRAINED)
        }

    def modifier(self, ability: Ability) -> int:
        """Get an ability modifier."""
        return self.ability_scores.modifier(ability)


def load_character(data: Mapping[str, Any]) -> Character:
    """Build a Character from a raw record, failing fast on bad structure.

    This is the deserialization boundary used by the persistence layer.

    Args:
        data: Raw character record (e.g., decoded JSON).

    Returns:
        The validated Character.

    Raises:
        InvalidCharacterError: If the record is structurally invalid.
    """
    try:
        return Character.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        field_name = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise InvalidCharacterError(
            "Invalid character record",
            field_name=field_name,
            details={"error_count": len(errors)},
        ) from exc


__all__ = [
    "calculate_modifier",
    "AbilityScore",
    "AbilityScores",
    "SkillProficiency",
    "CharacterFeat",
    "VariantRules",
    "AdHocSpellbook",
    "RankBonusSpells",
    "SpellbookState",
    "Character",
    "load_character",
]
