"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the warehouse inventory using Pydantic Settings.

A single cached Settings instance is shared by the services and the
interactive menu.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Security Considerations:
-----------------------
- Never commit .env files or user files to version control
- Change the default superadmin credentials immediately
- The weather API key belongs in the environment, not in code

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name shown in the menu banner
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        superadmin_username: Built-in account checked before the users file
        superadmin_password: Password of the built-in account
        users_file: Credential file with one ``username, password`` per line
        products_file: Flat product file (``id,name,quantity,category``)
        report_directory: Directory for rendered report files
        weather_api_key: OpenWeatherMap API key (empty disables the lookup)
        weather_api_url: Current-weather endpoint
        weather_location: City queried for the warehouse temperature
        weather_units: Unit system requested from the weather API
        weather_timeout_seconds: HTTP timeout for the weather lookup
        hot_threshold: Temperature above which cooling is switched on
        cold_threshold: Temperature below which heating is switched on
        category_delete_policy: What happens to a deleted category's products

    Example:
        >>> settings = Settings()
        >>> print(settings.app_name)
        'Warehouse Management System'
        >>> print(settings.category_delete_policy)
        'discard'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        # Environment variables are case-insensitive
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        # Validate default values
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Warehouse Management System",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # LOGIN SETTINGS
    # =========================================================================
    superadmin_username: str = Field(
        default="superadmin",
        min_length=3,
        max_length=49,
        description="Built-in account username"
    )

    superadmin_password: str = Field(
        default="admin123",
        min_length=6,
        description="Built-in account password"
    )

    users_file: str = Field(
        default="user.txt",
        description="Credential file, one 'username, password' per line"
    )

    # =========================================================================
    # FILE PATH SETTINGS
    # =========================================================================
    products_file: str = Field(
        default="products.txt",
        description="Flat product file loaded at start-up"
    )

    report_directory: str = Field(
        default="storage/reports",
        description="Directory for rendered report files"
    )

    # =========================================================================
    # WEATHER SETTINGS
    # =========================================================================
    weather_api_key: str = Field(
        default="",
        description="OpenWeatherMap API key; empty disables the lookup"
    )

    weather_api_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Current weather endpoint"
    )

    weather_location: str = Field(
        default="West Lafayette",
        min_length=1,
        description="City used for the warehouse temperature"
    )

    weather_units: str = Field(
        default="imperial",
        description="Unit system: standard, metric, imperial"
    )

    weather_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="HTTP timeout for the weather lookup"
    )

    # =========================================================================
    # CLIMATE CONTROL SETTINGS
    # =========================================================================
    hot_threshold: float = Field(
        default=100.0,
        description="Above this temperature the air conditioning is switched on"
    )

    cold_threshold: float = Field(
        default=40.0,
        description="Below this temperature the heating is switched on"
    )

    # =========================================================================
    # INVENTORY SETTINGS
    # =========================================================================
    category_delete_policy: str = Field(
        default="discard",
        description="Deleted category products: discard, reject, transfer"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("weather_units")
    @classmethod
    def validate_weather_units(cls, value: str) -> str:
        """
        Validate the unit system understood by OpenWeatherMap.

        Raises:
            ValueError: If the unit system is not supported
        """
        supported = {"standard", "metric", "imperial"}
        normalized = value.lower().strip()

        if normalized not in supported:
            raise ValueError(
                f"Unsupported weather units: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return normalized

    @field_validator("category_delete_policy")
    @classmethod
    def validate_delete_policy(cls, value: str) -> str:
        """
        Validate the category delete policy name.

        Raises:
            ValueError: If the policy is unknown
        """
        supported = {"discard", "reject", "transfer"}
        normalized = value.lower().strip()

        if normalized not in supported:
            raise ValueError(
                f"Unsupported category delete policy: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return normalized

    @model_validator(mode="after")
    def validate_thresholds(self) -> "Settings":
        """Cold threshold must sit below the hot threshold."""
        if self.cold_threshold >= self.hot_threshold:
            raise ValueError(
                f"cold_threshold ({self.cold_threshold}) must be lower than "
                f"hot_threshold ({self.hot_threshold})"
            )
        return self

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def weather_enabled(self) -> bool:
        """Temperature lookup only runs with an API key."""
        return bool(self.weather_api_key.strip())

    @property
    def users_path(self) -> Path:
        """Get users file as Path object."""
        return Path(self.users_file)

    @property
    def products_path(self) -> Path:
        """Get products file as Path object."""
        return Path(self.products_file)

    @property
    def report_path(self) -> Path:
        """
        Get report directory as Path object.

        Creates the directory if it doesn't exist.
        """
        path = Path(self.report_directory)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug}, "
            f"category_delete_policy={self.category_delete_policy!r})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Uses lru_cache so that every service sees the same configuration.
    Tests call ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
