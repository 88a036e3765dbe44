"""Read-only game-content catalog.

The rules engine talks to the catalog only through the ``ContentCatalog``
protocol. Queries are pure and synchronous, and an unknown id or an empty
category is simply "no content": queries never raise.

``InMemoryCatalog`` is the stock implementation. Parsing the source data
files is the loader's job; ``from_records`` only validates already decoded
records against the catalog schemas.

Example:
    >>> catalog = InMemoryCatalog.from_records([
    ...     {"kind": "spell", "id": "fear", "name": "Fear", "rank": 1,
    ...      "traditions": ["occult"]},
    ... ])
    >>> catalog.get_spell_by_id("fear").rank
    1
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pf2e_manager.core.exceptions import CatalogError
from pf2e_manager.core.logging import get_logger
from pf2e_manager.models.catalog import (
    CatalogEntry,
    ClassEntry,
    FeatEntry,
    SkillDefinition,
    SpecializationType,
    SpellEntry,
)


logger = get_logger(__name__)

_ENTRY_ADAPTER: TypeAdapter[CatalogEntry] = TypeAdapter(CatalogEntry)


@runtime_checkable
class ContentCatalog(Protocol):
    """Query interface the rules engine expects from the content catalog."""

    def get_spells(self) -> list[SpellEntry]: ...

    def get_feats(self) -> list[FeatEntry]: ...

    def get_class_by_id(self, class_id: str) -> ClassEntry | None: ...

    def get_specializations_for_class(self, class_id: str) -> list[SpecializationType]: ...

    def get_skills_catalog(self) -> list[SkillDefinition]: ...

    def get_spell_by_id(self, spell_id: str) -> SpellEntry | None: ...

    def get_feat_by_id(self, feat_id: str) -> FeatEntry | None: ...


class InMemoryCatalog:
    """Catalog held in memory and indexed by id.

    Entries are immutable models, so the lists handed out by queries can
    be shared without copying the entries themselves.
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        """Index catalog entries by kind and id.

        Args:
            entries: Validated catalog entries. A later entry with the same
                kind and id replaces an earlier one.
        """
        self._classes: dict[str, ClassEntry] = {}
        self._feats: dict[str, FeatEntry] = {}
        self._spells: dict[str, SpellEntry] = {}
        self._skills: dict[str, SkillDefinition] = {}
        self._specializations: dict[str, SpecializationType] = {}

        for entry in entries:
            if isinstance(entry, ClassEntry):
                self._classes[entry.id] = entry
            elif isinstance(entry, FeatEntry):
                self._feats[entry.id] = entry
            elif isinstance(entry, SpellEntry):
                self._spells[entry.id] = entry
            elif isinstance(entry, SkillDefinition):
                self._skills[entry.id] = entry
            elif isinstance(entry, SpecializationType):
                self._specializations[entry.id] = entry

        logger.debug(
            "Catalog indexed",
            classes=len(self._classes),
            feats=len(self._feats),
            spells=len(self._spells),
            skills=len(self._skills),
            specializations=len(self._specializations),
        )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "InMemoryCatalog":
        """Build a catalog from raw records.

        Args:
            records: Decoded records, each carrying a ``kind`` tag.

        Returns:
            The populated catalog.

        Raises:
            CatalogError: If a record does not match any catalog schema.
        """
        entries: list[CatalogEntry] = []
        for index, record in enumerate(records):
            try:
                entries.append(_ENTRY_ADAPTER.validate_python(record))
            except PydanticValidationError as exc:
                raise CatalogError(
                    f"Invalid catalog record at index {index}",
                    entry_id=str(record.get("id", "")) or None,
                    category=str(record.get("kind", "")) or None,
                    details={"error_count": exc.error_count()},
                ) from exc
        return cls(entries)

    # -------------------------------------------------------------------------
    # ContentCatalog queries
    # -------------------------------------------------------------------------

    def get_spells(self) -> list[SpellEntry]:
        return list(self._spells.values())

    def get_feats(self) -> list[FeatEntry]:
        return list(self._feats.values())

    def get_class_by_id(self, class_id: str) -> ClassEntry | None:
        return self._classes.get(class_id)

    def get_specializations_for_class(self, class_id: str) -> list[SpecializationType]:
        return [spec for spec in self._specializations.values() if spec.class_id == class_id]

    def get_skills_catalog(self) -> list[SkillDefinition]:
        return list(self._skills.values())

    def get_spell_by_id(self, spell_id: str) -> SpellEntry | None:
        return self._spells.get(spell_id)

    def get_feat_by_id(self, feat_id: str) -> FeatEntry | None:
        return self._feats.get(feat_id)


__all__ = [
    "ContentCatalog",
    "InMemoryCatalog",
]
