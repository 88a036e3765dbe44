"""Pydantic V2 schemas for game-content catalog entries.

Every catalog entity is its own immutable model tagged by a ``kind``
literal, and the entities are combined into the ``CatalogEntry``
discriminated union. Catalog entries are loaded once and never written to
by the rules engine.

Entries:
    ClassEntry: A character class and its skill training allowances.
    FeatEntry: A feat with level, category and prerequisite text.
    SpellEntry: A spell with rank, traditions and ritual flag.
    SpecializationType: A class specialization track and its options.
    SkillDefinition: A skill and its governing ability.

Example:
    >>> spell = SpellEntry(id="fear", name="Fear", rank=1, traditions=[Tradition.OCCULT])
    >>> spell.is_cantrip
    False
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pf2e_manager.models.enums import Ability, FeatCategory, Rarity, Tradition


if TYPE_CHECKING:
    from pf2e_manager.models.character import VariantRules


_ENTRY_CONFIG = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Classes, Feats, Spells, Skills
# =============================================================================


class ClassEntry(BaseModel):
    """A character class.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        additional_trained_skills: Base number of freely chosen trained skills.
        trained_skills: Skills the class trains automatically.
        specialization_slots: Number of specialization tracks the class picks.
        spellcasting_tradition: Tradition of the class's spellcasting, if any.
    """

    model_config = _ENTRY_CONFIG

    kind: Literal["class"] = "class"
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    additional_trained_skills: int = Field(default=0, ge=0)
    trained_skills: tuple[str, ...] = ()
    specialization_slots: int = Field(default=0, ge=0)
    spellcasting_tradition: Tradition | None = None


class FeatEntry(BaseModel):
    """A feat.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        level: Minimum character level.
        category: Feat source category.
        prerequisites: Free-text prerequisite clauses.
        rarity: Rarity of the feat.
        traits: Feat traits.
    """

    model_config = _ENTRY_CONFIG

    kind: Literal["feat"] = "feat"
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    level: int = Field(default=1, ge=1, le=20)
    category: FeatCategory
    prerequisites: tuple[str, ...] = ()
    rarity: Rarity = Rarity.COMMON
    traits: tuple[str, ...] = ()


class SpellEntry(BaseModel):
    """A spell.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        rank: Spell rank, 0 for cantrips.
        traditions: Traditions whose spell lists include the spell.
        is_ritual: Whether the spell is a ritual.
        traits: Spell traits.
        description: Raw catalog text, passed through unmodified.
    """

    model_config = _ENTRY_CONFIG

    kind: Literal["spell"] = "spell"
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    rank: int = Field(ge=0, le=10)
    traditions: frozenset[Tradition] = frozenset()
    is_ritual: bool = False
    traits: tuple[str, ...] = ()
    description: str = ""

    @property
    def is_cantrip(self) -> bool:
        """Whether the spell is a cantrip (rank 0)."""
        return self.rank == 0

    def has_tradition(self, tradition: Tradition) -> bool:
        """Check whether the spell belongs to a tradition's spell list."""
        return tradition in self.traditions


class SkillDefinition(BaseModel):
    """A skill and the ability that governs it."""

    model_config = _ENTRY_CONFIG

    kind: Literal["skill"] = "skill"
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    ability: Ability


# =============================================================================
# Specializations
# =============================================================================


class SpecializationAvailabilityRule(BaseModel):
    """Declarative level gate for a specialization type or option.

    All present conditions must hold. An empty rule always allows.

    Attributes:
        available_at_levels: Whitelist of levels; when set, only these levels.
        unavailable_at_levels: Blacklist of levels.
        min_level: Lowest level at which the entry unlocks.
        max_level: Highest level at which the entry is offered.
        requires_variant: Name of a variant rule that must be enabled.
    """

    model_config = _ENTRY_CONFIG

    available_at_levels: frozenset[int] | None = None
    unavailable_at_levels: frozenset[int] = frozenset()
    min_level: int | None = Field(default=None, ge=1, le=20)
    max_level: int | None = Field(default=None, ge=1, le=20)
    requires_variant: str | None = None

    def allows(self, level: int, variant_rules: VariantRules | None = None) -> bool:
        """Check whether the gate is open at a character level.

        Args:
            level: Character level.
            variant_rules: Enabled variant rules; None means all disabled.

        Returns:
            True if every condition of the rule holds.
        """
        if self.available_at_levels is not None and level not in self.available_at_levels:
            return False
        if level in self.unavailable_at_levels:
            return False
        if self.min_level is not None and level < self.min_level:
            return False
        if self.max_level is not None and level > self.max_level:
            return False
        if self.requires_variant is not None:
            return variant_rules is not None and variant_rules.is_enabled(self.requires_variant)
        return True


class SpecializationOption(BaseModel):
    """One selectable option of a specialization type (a muse, an order...)."""

    model_config = _ENTRY_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    source: str = ""
    availability: SpecializationAvailabilityRule | None = None


class SpecializationType(BaseModel):
    """A class specialization track.

    Level gates that used to be special cases for particular classes are
    carried here as data, so the eligibility engine stays class-agnostic.

    Attributes:
        id: Catalog identifier.
        name: Display name (e.g., 'Muse').
        class_id: Class this track belongs to.
        tag: Word used in prerequisite text (e.g., 'muse', 'instinct').
        max_selections: How many options may be selected together.
        availability: Level gate for the whole track.
        options: Selectable options.
    """

    model_config = _ENTRY_CONFIG

    kind: Literal["specialization_type"] = "specialization_type"
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    tag: str = ""
    max_selections: int = Field(default=1, ge=1)
    availability: SpecializationAvailabilityRule = Field(
        default_factory=SpecializationAvailabilityRule
    )
    options: tuple[SpecializationOption, ...] = ()

    @property
    def is_multi_select(self) -> bool:
        """Whether more than one option may be selected."""
        return self.max_selections > 1


CatalogEntry = Annotated[
    Union[ClassEntry, FeatEntry, SpellEntry, SpecializationType, SkillDefinition],
    Field(discriminator="kind"),
]
"""Tagged union of every catalog entity, discriminated by ``kind``."""


__all__ = [
    "ClassEntry",
    "FeatEntry",
    "SpellEntry",
    "SkillDefinition",
    "SpecializationAvailabilityRule",
    "SpecializationOption",
    "SpecializationType",
    "CatalogEntry",
]
