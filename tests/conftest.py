"""
Root Pytest Fixtures.

Shared fixtures available to all test types. Every test starts with clean
configuration caches, no Databricks credentials in the environment and no
cached CLI client.
"""

import logging
from collections.abc import Generator

import pytest

import adbcli.cli.client as cli_client
from adbcli.core.config import get_app_config, get_settings


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear env credentials, lru caches and the CLI client singleton."""
    monkeypatch.delenv("DATABRICKS_HOST", raising=False)
    monkeypatch.delenv("DATABRICKS_TOKEN", raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    cli_client.configure_connection(None, None)
    cli_client._client = None
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    cli_client.configure_connection(None, None)
    cli_client._client = None
    _remove_stream_handlers()


def _remove_stream_handlers() -> None:
    """Drop handlers setup_logging() bound to streams that CliRunner has closed."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root_logger.removeHandler(handler)


@pytest.fixture
def databricks_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Provide workspace credentials through the environment."""
    env = {
        "DATABRICKS_HOST": "https://adb-test.azuredatabricks.net",
        "DATABRICKS_TOKEN": "dapi-test-token-1234",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    return env
