"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Pathfinder 2e character manager test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from pf2e_manager.catalog.accessor import InMemoryCatalog
    from pf2e_manager.models.character import Character


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from pf2e_manager.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "PF2E_MANAGER_DEBUG": "true",
        "PF2E_MANAGER_LOG_LEVEL": "DEBUG",
        "PF2E_MANAGER_RULES_GRADUAL_BOOST_REPETITION": "rolling",
        "PF2E_MANAGER_RULES_SKILL_OVERFLOW_POLICY": "reject",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def catalog_records() -> list[dict[str, Any]]:
    """Provide raw catalog records covering every entry kind.

    Returns:
        List of decoded catalog records.
    """
    skills = [
        ("acrobatics", "dexterity"),
        ("arcana", "intelligence"),
        ("athletics", "strength"),
        ("crafting", "intelligence"),
        ("deception", "charisma"),
        ("diplomacy", "charisma"),
        ("intimidation", "charisma"),
        ("medicine", "wisdom"),
        ("nature", "wisdom"),
        ("occultism", "intelligence"),
        ("performance", "charisma"),
        ("religion", "wisdom"),
        ("society", "intelligence"),
        ("stealth", "dexterity"),
        ("survival", "wisdom"),
        ("thievery", "dexterity"),
    ]
    records: list[dict[str, Any]] = [
        {"kind": "skill", "id": name, "name": name, "ability": ability}
        for name, ability in skills
    ]

    records += [
        {
            "kind": "class",
            "id": "bard",
            "name": "Bard",
            "additional_trained_skills": 4,
            "trained_skills": ["occultism", "performance"],
            "specialization_slots": 1,
            "spellcasting_tradition": "occult",
        },
        {
            "kind": "class",
            "id": "wizard",
            "name": "Wizard",
            "additional_trained_skills": 2,
            "trained_skills": ["arcana"],
            "specialization_slots": 1,
            "spellcasting_tradition": "arcane",
        },
        {
            "kind": "class",
            "id": "kineticist",
            "name": "Kineticist",
            "additional_trained_skills": 3,
            "trained_skills": ["nature"],
            "specialization_slots": 2,
        },
    ]

    records += [
        {
            "kind": "specialization_type",
            "id": "bard-muse",
            "name": "Muse",
            "class_id": "bard",
            "tag": "muse",
            "options": [
                {"id": "enigma", "name": "Enigma", "source": "Core"},
                {"id": "maestro", "name": "Maestro", "source": "Core"},
                {"id": "polymath", "name": "Polymath", "source": "Core"},
                {"id": "warrior", "name": "Warrior", "source": "Core"},
            ],
        },
        {
            "kind": "specialization_type",
            "id": "bard-free-archetype",
            "name": "Archetype Focus",
            "class_id": "bard",
            "availability": {"requires_variant": "free_archetype", "min_level": 2},
            "options": [{"id": "loremaster", "name": "Loremaster"}],
        },
        {
            "kind": "specialization_type",
            "id": "kineticist-elements",
            "name": "Kinetic Gate",
            "class_id": "kineticist",
            "tag": "element",
            "max_selections": 2,
            "options": [
                {"id": "air", "name": "Air"},
                {"id": "earth", "name": "Earth"},
                {"id": "fire", "name": "Fire"},
                {"id": "water", "name": "Water", "availability": {"min_level": 5}},
            ],
        },
        {
            "kind": "specialization_type",
            "id": "kineticist-gate-threshold",
            "name": "Gate's Threshold",
            "class_id": "kineticist",
            "tag": "junction",
            "availability": {"available_at_levels": [5, 9, 13, 17]},
            "options": [
                {"id": "fork-the-path", "name": "Fork the Path"},
                {"id": "expand-the-portal", "name": "Expand the Portal"},
            ],
        },
    ]

    records += [
        {"kind": "spell", "id": "daze", "name": "Daze", "rank": 0, "traditions": ["arcane", "divine", "occult"]},
        {"kind": "spell", "id": "soothe", "name": "Soothe", "rank": 1, "traditions": ["divine", "occult"]},
        {"kind": "spell", "id": "fear", "name": "Fear", "rank": 1, "traditions": ["arcane", "divine", "occult", "primal"]},
        {"kind": "spell", "id": "bane", "name": "Bane", "rank": 1, "traditions": ["divine", "occult"]},
        {"kind": "spell", "id": "paranoia", "name": "Paranoia", "rank": 2, "traditions": ["occult"]},
        {"kind": "spell", "id": "invisibility", "name": "Invisibility", "rank": 2, "traditions": ["arcane", "occult"]},
        {"kind": "spell", "id": "fireball", "name": "Fireball", "rank": 3, "traditions": ["arcane", "primal"]},
        {"kind": "spell", "id": "slow", "name": "Slow", "rank": 3, "traditions": ["arcane", "occult"]},
        {"kind": "spell", "id": "synesthesia", "name": "Synesthesia", "rank": 5, "traditions": ["occult"]},
        {
            "kind": "spell",
            "id": "call-spirit",
            "name": "Call Spirit",
            "rank": 5,
            "traditions": ["divine", "occult"],
            "is_ritual": True,
        },
    ]

    records += [
        {
            "kind": "feat",
            "id": "esoteric-polymath",
            "name": "Esoteric Polymath",
            "level": 2,
            "category": "class",
            "prerequisites": ["polymath muse"],
        },
        {
            "kind": "feat",
            "id": "deep-lore",
            "name": "Deep Lore",
            "level": 18,
            "category": "class",
            "prerequisites": ["enigma muse", "legendary in Occultism"],
        },
        {
            "kind": "feat",
            "id": "bardic-lore",
            "name": "Bardic Lore",
            "level": 1,
            "category": "class",
            "prerequisites": ["enigma muse"],
        },
        {
            "kind": "feat",
            "id": "battle-medicine",
            "name": "Battle Medicine",
            "level": 1,
            "category": "skill",
            "prerequisites": ["trained in Medicine"],
        },
        {
            "kind": "feat",
            "id": "intimidating-glare",
            "name": "Intimidating Glare",
            "level": 1,
            "category": "skill",
            "prerequisites": ["trained in Intimidation"],
        },
        {"kind": "feat", "id": "toughness", "name": "Toughness", "level": 1, "category": "general"},
        {"kind": "feat", "id": "incredible-initiative", "name": "Incredible Initiative", "level": 3, "category": "general"},
        {
            "kind": "feat",
            "id": "sorcerer-dedication",
            "name": "Sorcerer Dedication",
            "level": 2,
            "category": "archetype",
            "prerequisites": ["Cha +2"],
            "rarity": "common",
            "traits": ["archetype", "dedication"],
        },
    ]
    return records


@pytest.fixture
def catalog(catalog_records: list[dict[str, Any]]) -> InMemoryCatalog:
    """Create an in-memory catalog from the sample records.

    Args:
        catalog_records: Raw catalog records.

    Returns:
        InMemoryCatalog instance.
    """
    from pf2e_manager.catalog.accessor import InMemoryCatalog

    return InMemoryCatalog.from_records(catalog_records)


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_ability_scores() -> dict[str, int]:
    """Provide sample bard ability scores.

    Returns:
        Dictionary of ability scores.
    """
    return {
        "strength": 10,
        "dexterity": 14,
        "constitution": 12,
        "intelligence": 12,
        "wisdom": 10,
        "charisma": 18,
    }


@pytest.fixture
def sample_character_data(sample_ability_scores: dict[str, int]) -> dict[str, Any]:
    """Provide a raw character record for testing.

    Args:
        sample_ability_scores: Ability scores.

    Returns:
        Dictionary of character data.
    """
    return {
        "name": "Lyra",
        "class_id": "bard",
        "level": 1,
        "ability_scores": sample_ability_scores,
        "specialization_ids": ["polymath"],
        "known_spells": ["soothe", "fear", "daze"],
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Character:
    """Create a level 1 polymath bard.

    Args:
        sample_character_data: Character data dictionary.

    Returns:
        Character instance.
    """
    from pf2e_manager.models.character import load_character

    return load_character(sample_character_data)


@pytest.fixture
def polymath_bard(sample_character: Character) -> Character:
    """Create a level 4 bard who has taken Esoteric Polymath.

    Args:
        sample_character: Base bard.

    Returns:
        Character instance.
    """
    from pf2e_manager.models.character import CharacterFeat
    from pf2e_manager.models.enums import FeatCategory

    return sample_character.model_copy(
        update={
            "level": 4,
            "feats": (CharacterFeat(feat_id="esoteric-polymath", level=2, source=FeatCategory.CLASS),),
        }
    )


@pytest.fixture
def enigma_bard(sample_character: Character) -> Character:
    """Create a level 18 enigma bard with Deep Lore.

    Args:
        sample_character: Base bard.

    Returns:
        Character instance.
    """
    from pf2e_manager.models.character import CharacterFeat, SkillProficiency
    from pf2e_manager.models.enums import Ability, FeatCategory, Proficiency

    return sample_character.model_copy(
        update={
            "level": 18,
            "specialization_ids": ("enigma",),
            "skills": (
                SkillProficiency(name="occultism", ability=Ability.INT, proficiency=Proficiency.LEGENDARY),
            ),
            "feats": (CharacterFeat(feat_id="deep-lore", level=18, source=FeatCategory.CLASS),),
        }
    )


@pytest.fixture
def gradual_character() -> Character:
    """Create a level 20 fighter using gradual ability boosts.

    Returns:
        Character instance.
    """
    from pf2e_manager.models.character import Character, VariantRules

    return Character(
        name="Brakka",
        class_id="fighter",
        level=20,
        variant_rules=VariantRules(gradual_ability_boosts=True),
    )
