"""Tests for the spellbook and bonus-spell managers."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from pf2e_manager.catalog.accessor import InMemoryCatalog
from pf2e_manager.models.character import AdHocSpellbook, Character, RankBonusSpells
from pf2e_manager.rules.spellbooks import (
    DEEP_LORE,
    ESOTERIC_POLYMATH,
    AdHocSpellbookManager,
    RankBonusSpellManager,
)


@pytest.fixture
def polymath(catalog: InMemoryCatalog) -> AdHocSpellbookManager:
    """Create the Esoteric Polymath spellbook manager."""
    return AdHocSpellbookManager(ESOTERIC_POLYMATH, catalog)


@pytest.fixture
def deep_lore(catalog: InMemoryCatalog) -> RankBonusSpellManager:
    """Create the Deep Lore bonus spell manager."""
    return RankBonusSpellManager(DEEP_LORE, catalog)


@pytest.fixture
def opened_book(polymath: AdHocSpellbookManager, polymath_bard: Character) -> Character:
    """A polymath bard with an initialized, empty spellbook."""
    return polymath.initialize(polymath_bard)


class TestAdHocInitialize:
    """Tests for spellbook initialization."""

    def test_creates_empty_spellbook(self, polymath: AdHocSpellbookManager, polymath_bard: Character) -> None:
        """Test initialize creates an empty spellbook."""
        character = polymath.initialize(polymath_bard)

        assert character.spellbook["esoteric_polymath"] == AdHocSpellbook()
        assert polymath_bard.spellbook == {}

    def test_idempotent(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test initializing twice changes nothing."""
        with_spell = polymath.add_spell(opened_book, "paranoia")

        assert polymath.initialize(with_spell) is with_spell

    def test_without_feat(self, polymath: AdHocSpellbookManager, sample_character: Character) -> None:
        """Test initialize is a no-op without the feat."""
        assert polymath.initialize(sample_character) is sample_character

    def test_removed_feat_drops_spellbook(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test the spellbook is removed once the feat is gone."""
        without_feat = opened_book.model_copy(update={"feats": ()})

        assert polymath.initialize(without_feat).spellbook == {}

    def test_legacy_feat_id(self, polymath: AdHocSpellbookManager, polymath_bard: Character) -> None:
        """Test the legacy feat id grants the feature too."""
        legacy = polymath_bard.model_copy(
            update={"feats": (polymath_bard.feats[0].model_copy(update={"feat_id": "4HZTLPKPteEFsa7n"}),)}
        )

        assert polymath.has_feature(legacy)


class TestAdHocAddRemove:
    """Tests for adding and removing spells."""

    def test_add_rank_two_occult(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test a rank 2 occult spell is accepted."""
        character = polymath.add_spell(opened_book, "paranoia")

        assert polymath.state(character).spell_ids == ("paranoia",)

    @pytest.mark.parametrize(
        "spell_id",
        ["daze", "fireball", "call-spirit", "no-such-spell"],
        ids=["cantrip", "wrong-tradition", "ritual", "unknown"],
    )
    def test_rejected_adds(self, polymath: AdHocSpellbookManager, opened_book: Character, spell_id: str) -> None:
        """Test invalid adds leave the character unchanged."""
        with capture_logs() as logs:
            result = polymath.add_spell(opened_book, spell_id)

        assert result is opened_book
        assert logs[0]["event"] == "Spellbook add rejected"

    def test_duplicate_add(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test adding a present spell is a no-op."""
        character = polymath.add_spell(opened_book, "paranoia")

        assert polymath.add_spell(character, "paranoia") is character

    def test_add_before_initialize(self, polymath: AdHocSpellbookManager, polymath_bard: Character) -> None:
        """Test adds require an initialized spellbook."""
        assert polymath.add_spell(polymath_bard, "paranoia") is polymath_bard

    def test_remove_clears_daily_preparation(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test removing the prepared spell clears the preparation."""
        character = polymath.add_spell(opened_book, "paranoia")
        character = polymath.set_daily_preparation(character, "paranoia")
        assert polymath.state(character).daily_preparation == "paranoia"

        character = polymath.remove_spell(character, "paranoia")

        state = polymath.state(character)
        assert state.spell_ids == ()
        assert state.daily_preparation is None

    def test_remove_other_keeps_preparation(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test removing a different spell keeps the preparation."""
        character = polymath.add_spell(opened_book, "paranoia")
        character = polymath.add_spell(character, "slow")
        character = polymath.set_daily_preparation(character, "paranoia")

        character = polymath.remove_spell(character, "slow")

        assert polymath.state(character).daily_preparation == "paranoia"

    def test_membership_invariant(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test the prepared spell stays a member after any add/remove sequence."""
        character = opened_book
        operations = [
            ("add", "paranoia"),
            ("prep", "paranoia"),
            ("add", "slow"),
            ("remove", "paranoia"),
            ("prep", "paranoia"),
            ("prep", "slow"),
            ("add", "fear"),
            ("remove", "slow"),
        ]
        for operation, spell_id in operations:
            if operation == "add":
                character = polymath.add_spell(character, spell_id)
            elif operation == "remove":
                character = polymath.remove_spell(character, spell_id)
            else:
                character = polymath.set_daily_preparation(character, spell_id)
            state = polymath.state(character)
            assert state.daily_preparation is None or state.daily_preparation in state.spell_ids


class TestAdHocQueries:
    """Tests for eligibility and derived repertoire queries."""

    def test_eligible_spells(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test the eligible list excludes cantrips, rituals, other traditions and present spells."""
        character = polymath.add_spell(opened_book, "bane")

        eligible = [spell.id for spell in polymath.eligible_spells(character)]

        assert eligible == ["fear", "soothe", "invisibility", "paranoia", "slow", "synesthesia"]

    def test_eligible_spells_uninitialized(self, polymath: AdHocSpellbookManager, polymath_bard: Character) -> None:
        """Test an uninitialized spellbook offers nothing."""
        assert polymath.eligible_spells(polymath_bard) == []

    def test_set_preparation_requires_membership(
        self,
        polymath: AdHocSpellbookManager,
        opened_book: Character,
    ) -> None:
        """Test preparing a spell outside the spellbook is a no-op."""
        assert polymath.set_daily_preparation(opened_book, "paranoia") is opened_book

    def test_reset_daily_preparation(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test daily reset clears the preparation."""
        character = polymath.set_daily_preparation(polymath.add_spell(opened_book, "slow"), "slow")

        assert polymath.state(polymath.reset_daily_preparation(character)).daily_preparation is None

    def test_sync_with_repertoire(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test eligible known spells are copied in and hand-added spells kept."""
        character = polymath.add_spell(opened_book, "paranoia")

        synced = polymath.sync_with_repertoire(character)

        # daze is a cantrip and stays out.
        assert polymath.state(synced).spell_ids == ("paranoia", "soothe", "fear")
        assert polymath.sync_with_repertoire(synced) is synced

    def test_effective_repertoire(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test a prepared spell outside the repertoire is added to it."""
        character = polymath.set_daily_preparation(polymath.add_spell(opened_book, "paranoia"), "paranoia")

        assert polymath.effective_repertoire(character) == ("soothe", "fear", "daze", "paranoia")
        assert polymath.effective_signature_spells(character) == ()

    def test_effective_signature_spells(self, polymath: AdHocSpellbookManager, opened_book: Character) -> None:
        """Test a prepared spell inside the repertoire becomes a signature spell."""
        character = polymath.sync_with_repertoire(opened_book)
        character = polymath.set_daily_preparation(character, "fear")

        assert polymath.effective_signature_spells(character) == ("fear",)
        assert polymath.effective_repertoire(character) == character.known_spells


class TestRankBonusSpells:
    """Tests for the per-rank bonus spell manager."""

    def test_available_ranks(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test ranks run from 1 to the max castable rank."""
        assert deep_lore.available_ranks(enigma_bard) == tuple(range(1, 10))

    def test_no_feature(self, deep_lore: RankBonusSpellManager, sample_character: Character) -> None:
        """Test characters without the feat get nothing."""
        assert deep_lore.available_ranks(sample_character) == ()
        assert deep_lore.set_extra_spell(sample_character, 1, "bane") is sample_character

    def test_eligible_spells(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test known spells and other traditions are excluded."""
        assert [spell.id for spell in deep_lore.eligible_spells(enigma_bard, 1)] == ["bane"]
        assert deep_lore.eligible_spells(enigma_bard, 10) == []

    def test_set_and_clear(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test setting, replacing and clearing a rank's spell."""
        character = deep_lore.set_extra_spell(enigma_bard, 2, "paranoia")
        assert deep_lore.extra_spells(character) == {2: "paranoia"}
        assert isinstance(character.spellbook["deep_lore"], RankBonusSpells)

        character = deep_lore.set_extra_spell(character, 2, "invisibility")
        assert deep_lore.extra_spells(character) == {2: "invisibility"}

        character = deep_lore.set_extra_spell(character, 2, None)
        assert deep_lore.extra_spells(character) == {}

    @pytest.mark.parametrize(
        ("rank", "spell_id"),
        [(10, "paranoia"), (0, "daze"), (2, "slow"), (3, "fireball"), (1, "fear")],
        ids=["rank-too-high", "rank-zero", "rank-mismatch", "wrong-tradition", "already-known"],
    )
    def test_rejected(
        self,
        deep_lore: RankBonusSpellManager,
        enigma_bard: Character,
        rank: int,
        spell_id: str,
    ) -> None:
        """Test invalid picks leave the character unchanged."""
        assert deep_lore.set_extra_spell(enigma_bard, rank, spell_id) is enigma_bard

    def test_current_pick_stays_listed(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test the spell chosen for a rank is still offered for that rank."""
        character = deep_lore.set_extra_spell(enigma_bard, 1, "bane")

        assert [spell.id for spell in deep_lore.eligible_spells(character, 1)] == ["bane"]
        assert deep_lore.set_extra_spell(character, 1, "bane") is character

    def test_apply_to_repertoire(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test chosen spells are merged into known spells in rank order."""
        character = deep_lore.set_extra_spell(enigma_bard, 5, "synesthesia")
        character = deep_lore.set_extra_spell(character, 2, "paranoia")

        assert deep_lore.spells_for_repertoire(character) == ("paranoia", "synesthesia")

        applied = deep_lore.apply_to_repertoire(character)

        assert applied.known_spells == ("soothe", "fear", "daze", "paranoia", "synesthesia")
        assert deep_lore.apply_to_repertoire(applied) is applied

    def test_applied_pick_stays_eligible(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test a pick merged into the repertoire is still offered for its rank."""
        character = deep_lore.apply_to_repertoire(deep_lore.set_extra_spell(enigma_bard, 1, "bane"))

        assert [spell.id for spell in deep_lore.eligible_spells(character, 1)] == ["bane"]

    def test_clear_after_apply_removes_spell(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test clearing an applied pick takes it out of the known spells."""
        character = deep_lore.apply_to_repertoire(deep_lore.set_extra_spell(enigma_bard, 1, "bane"))

        cleared = deep_lore.set_extra_spell(character, 1, None)

        assert cleared.known_spells == ("soothe", "fear", "daze")
        assert deep_lore.extra_spells(cleared) == {}

    def test_replace_after_apply_swaps_spell(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test replacing an applied pick keeps one bonus spell for the rank."""
        character = deep_lore.apply_to_repertoire(deep_lore.set_extra_spell(enigma_bard, 2, "paranoia"))

        replaced = deep_lore.apply_to_repertoire(deep_lore.set_extra_spell(character, 2, "invisibility"))

        assert replaced.known_spells == ("soothe", "fear", "daze", "invisibility")

    def test_ranks_above_level_not_applied(self, deep_lore: RankBonusSpellManager, enigma_bard: Character) -> None:
        """Test a chosen spell for a rank no longer castable is left out."""
        character = deep_lore.set_extra_spell(enigma_bard, 5, "synesthesia")
        demoted = character.model_copy(update={"level": 7})

        assert deep_lore.spells_for_repertoire(demoted) == ()
