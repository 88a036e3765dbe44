"""Configuration management for the Pathfinder 2e character manager.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

The ruleset leaves two behaviours open, and both are exposed here as
explicit settings rather than being silently decided in code:

* which repetition constraint the gradual ability boost variant enforces;
* what happens when more trained skills are submitted than there are slots.

Example:
    >>> from pf2e_manager.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.gradual_boost_repetition
    <BoostRepetitionRule.BLOCK: 'block'>

Environment Variables:
    PF2E_MANAGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    PF2E_MANAGER_RULES_GRADUAL_BOOST_REPETITION: 'block' or 'rolling'
    PF2E_MANAGER_RULES_GRADUAL_BOOST_WINDOW: Abilities locked by the rolling rule
    PF2E_MANAGER_RULES_SKILL_OVERFLOW_POLICY: 'truncate' or 'reject'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pf2e_manager.core.exceptions import ConfigurationError
from pf2e_manager.models.enums import Ability, BoostRepetitionRule, SkillOverflowPolicy


class RulesSettings(BaseSettings):
    """Configuration for rule resolution behaviour.

    Attributes:
        gradual_boost_repetition: Repetition constraint used by the gradual
            ability boost variant.
        gradual_boost_window: Number of most recently boosted distinct
            abilities that cannot be boosted again under the rolling rule.
        skill_overflow_policy: How an over-long trained skill selection is
            finalized.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF2E_MANAGER_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gradual_boost_repetition: BoostRepetitionRule = Field(
        default=BoostRepetitionRule.BLOCK,
        description="Gradual ability boost repetition rule",
    )
    gradual_boost_window: int = Field(
        default=3,
        ge=1,
        description="Distinct abilities locked by the rolling repetition rule",
    )
    skill_overflow_policy: SkillOverflowPolicy = Field(
        default=SkillOverflowPolicy.TRUNCATE,
        description="Over-limit trained skill selection policy",
    )

    @model_validator(mode="after")
    def validate_boost_window(self) -> "RulesSettings":
        """Ensure the rolling window leaves at least one ability selectable.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the window would lock every ability.
        """
        if self.gradual_boost_window >= len(Ability):
            raise ConfigurationError(
                f"gradual_boost_window ({self.gradual_boost_window}) must be less than "
                f"the number of abilities ({len(Ability)})",
                config_key="gradual_boost_window",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        rules: Rule resolution settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF2E_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Pathfinder 2e Character Manager",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
