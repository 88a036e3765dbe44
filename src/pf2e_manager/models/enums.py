"""Enumeration types for the Pathfinder 2e character manager.

This module defines the enumerations shared by the data model and the rules
engine: abilities, proficiency ranks, catalog categories and the switches
that select between the configurable rule variants.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """Pathfinder 2e ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name

    @classmethod
    def parse(cls, value: str) -> "Ability | None":
        """Resolve an ability from its full name or abbreviation.

        Args:
            value: Name such as 'int', 'INT' or 'Intelligence'.

        Returns:
            The matching Ability, or None if the text names no ability.
        """
        normalized = value.strip().lower()
        for ability in cls:
            if normalized in (ability.value, ability.name.lower()):
                return ability
        return None


class Proficiency(StrEnum):
    """Proficiency ranks, totally ordered from untrained to legendary.

    Rank checks must go through the ordering helpers rather than string
    equality: ``Proficiency.MASTER >= Proficiency.TRAINED`` is true even
    though the underlying strings do not compare that way.
    """

    UNTRAINED = "untrained"
    TRAINED = "trained"
    EXPERT = "expert"
    MASTER = "master"
    LEGENDARY = "legendary"

    @property
    def order(self) -> int:
        """Position of this rank in the proficiency ladder (0-4)."""
        return _PROFICIENCY_ORDER[self]

    def at_least(self, minimum: "Proficiency") -> bool:
        """Check whether this rank meets a minimum rank.

        Args:
            minimum: The minimum proficiency required.

        Returns:
            True if this rank is equal to or above the minimum.
        """
        return self.order >= minimum.order

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Proficiency):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Proficiency):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Proficiency):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Proficiency):
            return NotImplemented
        return self.order >= other.order


_PROFICIENCY_ORDER: dict[Proficiency, int] = {
    rank: index for index, rank in enumerate(Proficiency)
}


class FeatCategory(StrEnum):
    """Source category of a feat."""

    ANCESTRY = "ancestry"
    CLASS = "class"
    GENERAL = "general"
    SKILL = "skill"
    ARCHETYPE = "archetype"


class Rarity(StrEnum):
    """Catalog entry rarity."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    UNIQUE = "unique"


class Tradition(StrEnum):
    """Magical traditions."""

    ARCANE = "arcane"
    DIVINE = "divine"
    OCCULT = "occult"
    PRIMAL = "primal"


class BoostRepetitionRule(StrEnum):
    """Repetition constraint for the gradual ability boost variant.

    Values:
        BLOCK: An ability may be boosted at most once per level block
            (2-5, 7-10, 12-15, 17-20).
        ROLLING: An ability may not be boosted again until a configured
            number of other abilities have been boosted since.
    """

    BLOCK = "block"
    ROLLING = "rolling"


class SkillOverflowPolicy(StrEnum):
    """How an over-long trained skill selection is finalized.

    Values:
        TRUNCATE: Keep the first selections, in selection order, up to the
            slot count.
        REJECT: Discard the whole selection and leave the character as is.
    """

    TRUNCATE = "truncate"
    REJECT = "reject"


class BoostEventState(StrEnum):
    """Lifecycle of one level-up ability boost event."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


__all__ = [
    "Ability",
    "Proficiency",
    "FeatCategory",
    "Rarity",
    "Tradition",
    "BoostRepetitionRule",
    "SkillOverflowPolicy",
    "BoostEventState",
]
