"""Custom exception hierarchy for the Pathfinder 2e character manager.

The rules engine itself never raises for expected edge cases: lookup misses
return empty results and constraint violations degrade to returning the
input unchanged. The exceptions defined here are reserved for the
boundaries of the core, where malformed configuration, catalog records or
character records must fail fast.

Example:
    >>> from pf2e_manager.core.exceptions import CatalogError
    >>> raise CatalogError("Unknown entry kind", entry_id="fireball")
"""

from __future__ import annotations

from typing import Any


class Pf2eManagerError(Exception):
    """Base exception for all character manager errors.

    All custom exceptions in this application inherit from this class,
    enabling unified error handling at the application boundary.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(Pf2eManagerError):
    """Raised when application configuration is invalid.

    This includes invalid values or incompatible combinations of the
    variant-rule settings.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Boundary Exceptions
# =============================================================================


class CatalogError(Pf2eManagerError):
    """Raised when a game-content catalog record cannot be accepted.

    Only raised while building a catalog from raw records. Queries against
    an already built catalog never raise.
    """

    def __init__(
        self,
        message: str,
        *,
        entry_id: str | None = None,
        category: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with entry context.

        Args:
            message: Human-readable error description.
            entry_id: Identifier of the offending catalog entry.
            category: Kind of catalog entry (class, feat, spell, ...).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entry_id:
            combined_details["entry_id"] = entry_id
        if category:
            combined_details["category"] = category
        super().__init__(message, details=combined_details)


class InvalidCharacterError(Pf2eManagerError):
    """Raised when a character record is structurally invalid.

    This is the deserialization boundary failure; resolvers assume they
    receive a well-formed Character and never raise this themselves.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid character error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the first field that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


__all__ = [
    "Pf2eManagerError",
    "ConfigurationError",
    "CatalogError",
    "InvalidCharacterError",
]
