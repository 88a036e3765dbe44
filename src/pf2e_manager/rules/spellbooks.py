"""Spell repertoire and spellbook managers for special spellcasting feats.

Two shapes of feature are supported, each configured by a
``SpellbookFeature`` definition so that a new feat of the same shape is
data, not code:

- ``AdHocSpellbookManager``: a spellbook spells are added to one at a time,
  restricted to one tradition, with a single spell prepared each day
  (e.g., Esoteric Polymath).
- ``RankBonusSpellManager``: one extra repertoire spell per castable rank
  (e.g., Deep Lore).

Every operation is total. An invalid transition (feat not taken, wrong
tradition, cantrip, ritual, duplicate, unknown id, out-of-range rank)
returns the character unchanged; it never raises.

Example:
    >>> manager = AdHocSpellbookManager(ESOTERIC_POLYMATH, catalog)
    >>> character = manager.initialize(character)
    >>> character = manager.add_spell(character, "fear")
    >>> character = manager.set_daily_preparation(character, "fear")
    >>> manager.effective_repertoire(character)
    ('soothe', 'fear')
"""

from __future__ import annotations

from dataclasses import dataclass

from pf2e_manager.catalog.accessor import ContentCatalog
from pf2e_manager.core.logging import get_logger
from pf2e_manager.models.catalog import SpellEntry
from pf2e_manager.models.character import AdHocSpellbook, Character, RankBonusSpells
from pf2e_manager.models.enums import Tradition
from pf2e_manager.models.progression import max_castable_rank


logger = get_logger(__name__)


# =============================================================================
# Feature Definitions
# =============================================================================


@dataclass(frozen=True)
class SpellbookFeature:
    """A feat that carries spellbook sub-state.

    Attributes:
        name: Key of the feature's state in ``Character.spellbook``.
        feat_ids: Feat ids that grant the feature (slug and legacy ids).
        tradition: The only tradition the feature accepts.
    """

    name: str
    feat_ids: frozenset[str]
    tradition: Tradition

    def is_held_by(self, character: Character) -> bool:
        """Check whether the character has taken a granting feat."""
        return character.has_feat(self.feat_ids)

    def accepts(self, spell: SpellEntry) -> bool:
        """Check the rule-level restrictions: tradition, no cantrip, no ritual."""
        return spell.has_tradition(self.tradition) and not spell.is_cantrip and not spell.is_ritual


ESOTERIC_POLYMATH = SpellbookFeature(
    name="esoteric_polymath",
    feat_ids=frozenset({"esoteric-polymath", "4HZTLPKPteEFsa7n"}),
    tradition=Tradition.OCCULT,
)

DEEP_LORE = SpellbookFeature(
    name="deep_lore",
    feat_ids=frozenset({"deep-lore", "iTtnN49D8ZJ2Ilur"}),
    tradition=Tradition.OCCULT,
)


def _sorted_spells(spells: list[SpellEntry]) -> list[SpellEntry]:
    return sorted(spells, key=lambda spell: (spell.rank, spell.name.lower()))


def _with_state(character: Character, name: str, state: AdHocSpellbook | RankBonusSpells) -> Character:
    return character.model_copy(update={"spellbook": {**character.spellbook, name: state}})


# =============================================================================
# Ad-hoc Spellbook
# =============================================================================


class AdHocSpellbookManager:
    """Spellbook with ad-hoc additions and one daily-prepared spell.

    States: uninitialized (no entry in ``Character.spellbook``) and
    initialized (an ``AdHocSpellbook``). The prepared spell is always either
    None or a member of the spellbook.
    """

    def __init__(self, feature: SpellbookFeature, catalog: ContentCatalog) -> None:
        """Initialize the manager.

        Args:
            feature: The feature definition.
            catalog: Content catalog used to resolve spell ids.
        """
        self.feature = feature
        self.catalog = catalog

    def has_feature(self, character: Character) -> bool:
        return self.feature.is_held_by(character)

    def state(self, character: Character) -> AdHocSpellbook | None:
        """The character's spellbook state, None when uninitialized."""
        state = character.spellbook.get(self.feature.name)
        return state if isinstance(state, AdHocSpellbook) else None

    def initialize(self, character: Character) -> Character:
        """Create an empty spellbook if absent.

        Idempotent, so it is safe to call every time the feature is opened.
        When the granting feat is gone the spellbook is removed instead.
        """
        if not self.has_feature(character):
            if self.feature.name not in character.spellbook:
                return character
            spellbook = {name: state for name, state in character.spellbook.items() if name != self.feature.name}
            logger.info("Spellbook removed", feature=self.feature.name)
            return character.model_copy(update={"spellbook": spellbook})

        if self.state(character) is not None:
            return character
        logger.info("Spellbook initialized", feature=self.feature.name)
        return _with_state(character, self.feature.name, AdHocSpellbook())

    def is_eligible(self, character: Character, spell_id: str) -> bool:
        """Check whether a spell may be added to the spellbook."""
        state = self.state(character)
        if state is None or not self.has_feature(character) or spell_id in state.spell_ids:
            return False
        spell = self.catalog.get_spell_by_id(spell_id)
        return spell is not None and self.feature.accepts(spell)

    def eligible_spells(self, character: Character) -> list[SpellEntry]:
        """Catalog spells that may still be added, ordered by rank then name."""
        state = self.state(character)
        if state is None or not self.has_feature(character):
            return []
        present = set(state.spell_ids)
        return _sorted_spells(
            [spell for spell in self.catalog.get_spells() if spell.id not in present and self.feature.accepts(spell)]
        )

    def add_spell(self, character: Character, spell_id: str) -> Character:
        """Add a spell to the spellbook; invalid adds are no-ops."""
        state = self.state(character)
        if state is None or not self.is_eligible(character, spell_id):
            logger.debug("Spellbook add rejected", feature=self.feature.name, spell_id=spell_id)
            return character
        logger.info("Spell added to spellbook", feature=self.feature.name, spell_id=spell_id)
        return _with_state(
            character,
            self.feature.name,
            state.model_copy(update={"spell_ids": (*state.spell_ids, spell_id)}),
        )

    def remove_spell(self, character: Character, spell_id: str) -> Character:
        """Remove a spell, clearing the daily preparation if it was that spell."""
        state = self.state(character)
        if state is None or spell_id not in state.spell_ids:
            return character
        preparation = None if state.daily_preparation == spell_id else state.daily_preparation
        logger.info("Spell removed from spellbook", feature=self.feature.name, spell_id=spell_id)
        return _with_state(
            character,
            self.feature.name,
            state.model_copy(
                update={
                    "spell_ids": tuple(existing for existing in state.spell_ids if existing != spell_id),
                    "daily_preparation": preparation,
                }
            ),
        )

    def set_daily_preparation(self, character: Character, spell_id: str | None) -> Character:
        """Set or clear the daily-prepared spell.

        A spell id that is not in the spellbook leaves the character unchanged.
        """
        state = self.state(character)
        if state is None or not self.has_feature(character):
            return character
        if spell_id is not None and spell_id not in state.spell_ids:
            logger.debug("Daily preparation rejected", feature=self.feature.name, spell_id=spell_id)
            return character
        if state.daily_preparation == spell_id:
            return character
        logger.info("Daily preparation set", feature=self.feature.name, spell_id=spell_id)
        return _with_state(
            character,
            self.feature.name,
            state.model_copy(update={"daily_preparation": spell_id}),
        )

    def reset_daily_preparation(self, character: Character) -> Character:
        """Clear the daily preparation at the start of daily preparations."""
        return self.set_daily_preparation(character, None)

    def sync_with_repertoire(self, character: Character) -> Character:
        """Add every eligible repertoire spell to the spellbook.

        Spells added by hand are kept even if they are not in the repertoire.
        """
        state = self.state(character)
        if state is None or not self.has_feature(character):
            return character
        missing = [spell_id for spell_id in character.known_spells if self.is_eligible(character, spell_id)]
        if not missing:
            return character
        logger.info("Spellbook synced", feature=self.feature.name, added=missing)
        return _with_state(
            character,
            self.feature.name,
            state.model_copy(update={"spell_ids": tuple(dict.fromkeys((*state.spell_ids, *missing)))}),
        )

    def _active_preparation(self, character: Character) -> str | None:
        state = self.state(character)
        if state is None or not self.has_feature(character):
            return None
        return state.daily_preparation

    def effective_repertoire(self, character: Character) -> tuple[str, ...]:
        """Repertoire with a prepared spell from outside it appended."""
        preparation = self._active_preparation(character)
        if preparation is None or preparation in character.known_spells:
            return character.known_spells
        return (*character.known_spells, preparation)

    def effective_signature_spells(self, character: Character) -> tuple[str, ...]:
        """Signature spells, plus the prepared spell when it is in the repertoire."""
        preparation = self._active_preparation(character)
        if (
            preparation is None
            or preparation not in character.known_spells
            or preparation in character.signature_spells
        ):
            return character.signature_spells
        return (*character.signature_spells, preparation)


# =============================================================================
# Per-rank Bonus Spells
# =============================================================================


class RankBonusSpellManager:
    """One extra repertoire spell for each rank the character can cast."""

    def __init__(self, feature: SpellbookFeature, catalog: ContentCatalog) -> None:
        """Initialize the manager.

        Args:
            feature: The feature definition.
            catalog: Content catalog used to resolve spell ids.
        """
        self.feature = feature
        self.catalog = catalog

    def has_feature(self, character: Character) -> bool:
        return self.feature.is_held_by(character)

    def available_ranks(self, character: Character) -> tuple[int, ...]:
        """Ranks with a bonus slot: 1 up to the maximum castable rank."""
        if not self.has_feature(character):
            return ()
        return tuple(range(1, max_castable_rank(character.level) + 1))

    def extra_spells(self, character: Character) -> dict[int, str]:
        """Chosen spell per rank (a copy)."""
        state = character.spellbook.get(self.feature.name)
        if not isinstance(state, RankBonusSpells):
            return {}
        return dict(state.extra_spells)

    def eligible_spells(self, character: Character, rank: int) -> list[SpellEntry]:
        """Spells selectable for a rank's slot.

        Excludes spells already in the repertoire and spells chosen for
        another rank. The spell currently chosen for this rank stays listed,
        including after it has been merged into the repertoire.
        """
        if rank not in self.available_ranks(character):
            return []
        chosen = self.extra_spells(character)
        taken = (set(character.known_spells) - set(chosen.values())) | {
            spell_id for chosen_rank, spell_id in chosen.items() if chosen_rank != rank
        }
        return _sorted_spells(
            [
                spell
                for spell in self.catalog.get_spells()
                if spell.rank == rank and spell.id not in taken and self.feature.accepts(spell)
            ]
        )

    def set_extra_spell(self, character: Character, rank: int, spell_id: str | None) -> Character:
        """Replace or clear the bonus spell for a rank.

        A replaced or cleared pick that was merged into the repertoire is
        removed from the known spells again. Picks are never already known
        when chosen, so a known pick came from this feature.

        Args:
            character: The character.
            rank: Spell rank of the slot.
            spell_id: Spell to choose, or None to clear the slot.

        Returns:
            The updated character, or the input unchanged when the rank is
            out of range or the spell is not eligible for it.
        """
        if rank not in self.available_ranks(character):
            logger.debug("Bonus spell rank unavailable", feature=self.feature.name, rank=rank)
            return character

        extra = self.extra_spells(character)
        previous = extra.get(rank)
        if spell_id is None:
            if rank not in extra:
                return character
            del extra[rank]
        else:
            if extra.get(rank) == spell_id:
                return character
            if spell_id not in {spell.id for spell in self.eligible_spells(character, rank)}:
                logger.debug(
                    "Bonus spell rejected",
                    feature=self.feature.name,
                    rank=rank,
                    spell_id=spell_id,
                )
                return character
            extra[rank] = spell_id

        logger.info("Bonus spell set", feature=self.feature.name, rank=rank, spell_id=spell_id)
        updated = _with_state(character, self.feature.name, RankBonusSpells(extra_spells=extra))
        if previous is not None and previous in character.known_spells:
            updated = updated.model_copy(
                update={"known_spells": tuple(known for known in updated.known_spells if known != previous)}
            )
        return updated

    def spells_for_repertoire(self, character: Character) -> tuple[str, ...]:
        """Chosen spells for the ranks currently castable, in rank order."""
        ranks = set(self.available_ranks(character))
        extra = self.extra_spells(character)
        return tuple(extra[rank] for rank in sorted(extra) if rank in ranks)

    def apply_to_repertoire(self, character: Character) -> Character:
        """Merge the chosen bonus spells into the known spells."""
        missing = [spell_id for spell_id in self.spells_for_repertoire(character) if spell_id not in character.known_spells]
        if not missing:
            return character
        logger.info("Bonus spells added to repertoire", feature=self.feature.name, spells=missing)
        return character.model_copy(update={"known_spells": (*character.known_spells, *missing)})


__all__ = [
    "SpellbookFeature",
    "ESOTERIC_POLYMATH",
    "DEEP_LORE",
    "AdHocSpellbookManager",
    "RankBonusSpellManager",
]
