"""
HTTP Client for the Databricks REST API.

Provides the async HTTP client shared by the endpoint clients.
Requests carry a bearer token; non-2xx responses raise ApiError.
"""

from typing import Any

import httpx

from adbcli.core.exceptions import ApiError
from adbcli.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def _error_from_response(response: httpx.Response) -> ApiError:
    """Build an ApiError from a failed response, keeping status and body."""
    try:
        body: Any = response.json()
    except ValueError:
        body = response.text

    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or response.reason_phrase
        error_code = body.get("error_code")
    else:
        message = body or response.reason_phrase
        error_code = None

    return ApiError(
        status_code=response.status_code,
        message=message,
        error_code=error_code,
        body=body,
    )


class ApiClient:
    """
    HTTP client for REST API communication.

    Features:
    - Base URL of the form https://<workspace>/api/2.0/
    - Bearer token authentication
    - Structured logging of requests/responses
    - Non-2xx responses raised as ApiError with status and body

    Usage:
        client = ApiClient("https://host/api/2.0/", token)
        files = await client.get("dbfs/list", params={"path": "/"})
        await client.post("dbfs/mkdirs", json={"path": "/tmp/x"})
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 60.0,
        user_agent: str = "adbcli",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: REST API base URL, e.g. https://host/api/2.0/
            token: Personal access token or AAD token.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header value.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._token = token
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "User-Agent": self._user_agent,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make an HTTP request and decode the JSON response.

        Args:
            method: HTTP method (GET, POST)
            path: Endpoint path relative to the API base, e.g. dbfs/list
            **kwargs: Additional arguments for httpx

        Returns:
            Decoded JSON body, or an empty dict for an empty body.

        Raises:
            ApiError: On a non-2xx response
            httpx.HTTPError: On transport failure
        """
        client = self._get_client()

        log_with_source(logger, "api", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if not response.is_success:
            error = _error_from_response(response)
            log_with_source(
                logger,
                "api",
                "warning",
                "API error response",
                method=method,
                path=path,
                status_code=error.status_code,
                error_code=error.error_code,
            )
            raise error

        if not response.content:
            return {}
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, **kwargs: Any) -> Any:
        """Make a POST request. Accepts json=, data= and files= like httpx."""
        return await self.request("POST", path, **kwargs)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
