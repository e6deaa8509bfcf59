"""
Configuration Management.

Loads secrets from config/.env (or the process environment) and settings
from config/settings/*.yaml.

Secrets (.env / environment):
    DATABRICKS_TOKEN, DATABRICKS_HOST

Settings (YAML):
    application.yaml   - App identity, API endpoint, job defaults, DBFS block size
    logging.yaml       - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from adbcli.core.config_schema import ApplicationSchema, LoggingSchema
from adbcli.core.exceptions import ConfigurationError

_SOURCE_ROOT = Path(__file__).resolve().parents[2]


def find_project_root() -> Path:
    """
    Find project root by looking for .project_root marker file.

    Walks up from the current directory first, then falls back to the
    source tree the package was loaded from (editable installs).
    """
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    if (_SOURCE_ROOT / ".project_root").exists():
        return _SOURCE_ROOT
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env or the environment."""

    databricks_token: str | None = None
    databricks_host: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_api_base_url(host: str) -> str:
    """
    Build the REST API base URL for a workspace host.

    Args:
        host: Workspace URL, e.g. https://westeurope.azuredatabricks.net

    Returns:
        Base URL ending with a slash, e.g. https://.../api/2.0/
    """
    if not host.startswith(("http://", "https://")):
        raise ConfigurationError("Host must start with http:// or https://")
    version = get_app_config().application.api.version
    return f"{host.rstrip('/')}/api/{version}/"


def get_connection(host: str | None = None, token: str | None = None) -> tuple[str, str]:
    """
    Resolve workspace host and access token.

    Precedence: explicit arguments (CLI options), then DATABRICKS_HOST /
    DATABRICKS_TOKEN from the environment or config/.env, then api.host
    from application.yaml.

    Returns:
        Tuple of (host, token).

    Raises:
        ConfigurationError: If host or token cannot be resolved.
    """
    settings = get_settings()
    resolved_host = host or settings.databricks_host or get_app_config().application.api.host
    resolved_token = token or settings.databricks_token

    if not resolved_host:
        raise ConfigurationError(
            "Workspace host not configured. Use --host or set DATABRICKS_HOST."
        )
    if not resolved_token:
        raise ConfigurationError(
            "Access token not configured. Use --token or set DATABRICKS_TOKEN."
        )
    return resolved_host, resolved_token
