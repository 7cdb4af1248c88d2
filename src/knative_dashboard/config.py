"""Configuration for the Knative dashboard plugin.

Values are read from environment variables with the KNATIVE_DASHBOARD_
prefix or from a .env file, and can be overridden on the command line.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


MUTATING_OPERATIONS = frozenset({"create", "update", "delete"})


class KnativeDashboardConfig(BaseSettings):
    """Plugin configuration."""

    model_config = SettingsConfigDict(
        env_prefix="KNATIVE_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    plugin_name: str = Field(
        default="knative",
        description="Module name the host routes content requests with",
    )
    default_namespace: str = Field(
        default="default",
        description="Namespace selected until the host sends setNamespace",
    )
    root_path: str = Field(
        default="",
        description="Prefix the host puts in front of plugin content paths",
    )

    # Cluster access
    kubeconfig_path: Path | None = Field(
        default=None,
        description="Path to kubeconfig file (defaults to the standard lookup)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use",
    )
    field_manager: str = Field(
        default="knative-dashboard",
        description="Field manager name used for server-side apply",
    )

    # Safety
    read_only_mode: bool = Field(
        default=False,
        description="Refuse every action that would mutate the cluster",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    @field_validator("root_path")
    @classmethod
    def _strip_root_path(cls, value: str) -> str:
        value = value.strip()
        if value and not value.startswith("/"):
            value = "/" + value
        return value.rstrip("/")

    def is_operation_allowed(self, operation: str) -> tuple[bool, str | None]:
        """Check whether an operation may run under the current settings.

        Args:
            operation: One of "read", "create", "update", "delete".

        Returns:
            Tuple of (allowed, reason). The reason is None when allowed.
        """
        if self.read_only_mode and operation in MUTATING_OPERATIONS:
            return False, f"Operation '{operation}' is disabled in read-only mode"
        return True, None


@lru_cache(maxsize=1)
def get_config() -> KnativeDashboardConfig:
    """Return the process-wide configuration loaded from the environment."""
    return KnativeDashboardConfig()
