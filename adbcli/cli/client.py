"""
Client factory for CLI commands.

Commands share one DatabricksClient per invocation. Host and token given as
global CLI options are registered with configure_connection() before any
command runs.
"""

from adbcli.client.service import DatabricksApiService, DatabricksClient
from adbcli.core.config import get_api_base_url, get_app_config, get_connection

_host_override: str | None = None
_token_override: str | None = None
_client: DatabricksClient | None = None


def configure_connection(host: str | None = None, token: str | None = None) -> None:
    """Register host/token overrides from the command line."""
    global _host_override, _token_override
    _host_override = host
    _token_override = token


def resolve_connection() -> tuple[str, str]:
    """Host and token, honouring command-line overrides."""
    return get_connection(_host_override, _token_override)


def get_databricks_client() -> DatabricksClient:
    """
    Get or create the client singleton.

    Raises:
        ConfigurationError: If host or token cannot be resolved.
    """
    global _client
    if _client is None:
        host, token = resolve_connection()
        api = get_app_config().application.api
        _client = DatabricksClient(
            get_api_base_url(host),
            token,
            timeout=api.timeout_seconds,
            user_agent=api.user_agent,
            block_size=get_app_config().application.dbfs.block_size,
        )
    return _client


def get_api_service() -> DatabricksApiService:
    """Job service bound to the client singleton."""
    return DatabricksApiService(
        get_databricks_client(),
        poll_interval=get_app_config().application.jobs.poll_interval_seconds,
    )


async def close_databricks_client() -> None:
    """Close the client."""
    global _client
    if _client:
        await _client.close()
        _client = None
