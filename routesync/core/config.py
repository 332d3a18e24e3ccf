"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (and an optional .env file).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Compilation values (base path, strictness, prefix) have safe defaults;
  gateway target values are optional until a sync is requested

Usage:
    from routesync.core.config import get_settings

    settings = get_settings()
    strict = settings.break_on_same_path
    prefix = settings.operation_id_prefix
"""

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routesync.core.constants import (
    GATEWAY_TIMEOUT_DEFAULT,
    OPERATION_ID_PREFIX_DEFAULT,
)
from routesync.core.enums import Environment

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_PREFIX_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file in the working directory
        3. Default values (only for non-sensitive config)

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Compilation
    base_path: str = Field(
        default="",
        description="Path prefixed to every discovered route (e.g., /api)",
    )
    break_on_same_path: bool = Field(
        default=False,
        description="Fail when two templates collide once parameter names are erased",
    )
    operation_id_prefix: str = Field(
        default=OPERATION_ID_PREFIX_DEFAULT,
        description="Fixed prefix of generated operation identifiers",
    )

    # Azure authentication
    azure_tenant_id: str | None = Field(
        default=None,
        description="Azure AD tenant (directory) ID",
    )
    azure_client_id: str | None = Field(
        default=None,
        description="Service principal application (client) ID",
    )
    azure_client_secret: str | None = Field(
        default=None,
        description="Service principal client secret",
    )

    # Gateway target
    azure_subscription_id: str | None = Field(
        default=None,
        description="Subscription holding the API Management service",
    )
    resource_group_name: str | None = Field(
        default=None,
        description="Resource group of the API Management service",
    )
    service_name: str | None = Field(
        default=None,
        description="API Management service name",
    )
    api_id: str | None = Field(
        default=None,
        description="API identifier inside the API Management service",
    )
    api_version: str | None = Field(
        default=None,
        description="Optional API version label recorded on new revisions",
    )

    # Revision handling
    generate_new_revision: bool = Field(
        default=False,
        description="Write operations into a new API revision",
    )
    make_new_revision_current: bool = Field(
        default=False,
        description="Release the new revision as the current one",
    )

    # Endpoints
    management_base_url: str = Field(
        default="https://management.azure.com",
        description="Azure Resource Manager base URL",
    )
    login_base_url: str = Field(
        default="https://login.microsoftonline.com",
        description="Azure AD authority base URL",
    )
    gateway_timeout: float = Field(
        default=GATEWAY_TIMEOUT_DEFAULT,
        description="Management plane HTTP timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate and normalize the log level.

        Args:
            v: Log level name.

        Returns:
            str: Upper-cased log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator("operation_id_prefix")
    @classmethod
    def validate_operation_id_prefix(cls, v: str) -> str:
        """
        Validate the operation identifier prefix is a lowercase slug.

        Args:
            v: Prefix value.

        Returns:
            str: Validated prefix.

        Raises:
            ValueError: If the prefix is empty or contains invalid characters.
        """
        if not _PREFIX_PATTERN.match(v):
            raise ValueError(
                "operation_id_prefix must be lowercase letters, digits and dashes"
            )
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def has_gateway_target(self) -> bool:
        """Check if every value needed to address the gateway API is set."""
        return all(
            (
                self.azure_subscription_id,
                self.resource_group_name,
                self.service_name,
                self.api_id,
            )
        )

    @property
    def has_credentials(self) -> bool:
        """Check if service principal credentials are set."""
        return all(
            (self.azure_tenant_id, self.azure_client_id, self.azure_client_secret)
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
