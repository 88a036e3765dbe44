"""Read-only game-content catalog access."""

from __future__ import annotations

from pf2e_manager.catalog.accessor import ContentCatalog, InMemoryCatalog


__all__ = [
    "ContentCatalog",
    "InMemoryCatalog",
]
