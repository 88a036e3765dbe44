"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        Pf2eManagerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        CatalogError: Malformed catalog records.
        InvalidCharacterError: Structurally invalid character records.

    Configuration:
        Settings: Main application settings class.
        RulesSettings: Rule resolution settings.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from pf2e_manager.core.exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidCharacterError,
    Pf2eManagerError,
)
from pf2e_manager.core.config import (
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from pf2e_manager.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "Pf2eManagerError",
    "ConfigurationError",
    "CatalogError",
    "InvalidCharacterError",
    # Configuration
    "Settings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
