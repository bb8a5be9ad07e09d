"""
Configuration management for the share registry.
Uses pydantic-settings so every value can come from the environment or a .env file.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """
    Registry settings loaded from environment variables.

    Variable names match the web application's .env keys
    (DEFAULT_CURRENCY, DEFAULT_COUNTRY, LOCALE).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Labelling defaults
    default_currency: str = "USD"
    default_country: str = "United States"
    locale: str = "en-US"

    # Audit export
    audit_export_limit: int = 10000
    audit_page_size: int = 50

    @property
    def currency_code(self) -> str:
        """Default currency normalised to an upper-case ISO code."""
        return (self.default_currency or "USD").strip().upper()


# Global settings instance
_settings: Optional[RegistrySettings] = None


def get_settings() -> RegistrySettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = RegistrySettings()
    return _settings


def reload_settings() -> RegistrySettings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = RegistrySettings()
    return _settings


def default_currency_code() -> str:
    return get_settings().currency_code
