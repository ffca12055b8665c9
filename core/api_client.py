# =============================================================================
# core/api_client.py  —  Code-Intelligence API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Forwards the four query tools to the local code-intelligence API as
#   plain GET requests and returns the decoded JSON body untouched.
#
#     glob_search        →  GET /glob-search?query=
#     typed_glob_search  →  GET /typed-glob-search?query=&symbolType=
#     inspect            →  GET /inspect?fqcn=
#     get_docs           →  GET /docs?fqcn=
#
# ERRORS:
#   Both failure modes become ApiError with an "API Error: " prefix:
#     - the server answered with a non-2xx status  →  its response body
#       (or httpx's message when the body is empty)
#     - no response at all (refused, DNS, protocol) →  httpx's message
#   Anything else propagates unchanged.
#
# No retries, no caching, no timeout.  Each call opens its own AsyncClient.
# =============================================================================

import json
import logging
from typing import Any

import httpx

from core.models import SymbolType

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the code-intelligence API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def format_json(data: Any) -> str:
    """Pretty-print a JSON value the way it is handed back to the host."""
    return json.dumps(data, indent=2, ensure_ascii=False)


class ScalaApiClient:
    """Thin async client for the code-intelligence API.

    Args:
        base_url: API root, e.g. "http://localhost:8888/api".
        transport: Optional httpx transport.  Tests pass an
            httpx.MockTransport here; production leaves it as None.
    """

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(self, path: str, params: dict[str, str]) -> Any:
        """Issue one GET and return the decoded JSON body.

        Raises:
            ApiError: On a non-2xx status or a transport-level failure.
        """
        url = self.url_for(path)
        logger.debug("GET %s params=%s", url, params)

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=None,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                detail = exc.response.text or str(exc)
                raise ApiError(
                    f"API Error: {detail}", status_code=exc.response.status_code
                ) from exc
            except httpx.RequestError as exc:
                raise ApiError(f"API Error: {str(exc) or type(exc).__name__}") from exc

        try:
            return response.json()
        except ValueError:
            # Not JSON; forward the raw body as a string value.
            return response.text

    # -------------------------------------------------------------------------
    # One method per endpoint
    # -------------------------------------------------------------------------

    async def glob_search(self, query: str) -> Any:
        return await self.get("/glob-search", {"query": query})

    async def typed_glob_search(self, query: str, symbol_type: SymbolType) -> Any:
        return await self.get(
            "/typed-glob-search",
            {"query": query, "symbolType": symbol_type},
        )

    async def inspect(self, fqcn: str) -> Any:
        """Structural summary of the symbol named by a fully-qualified name."""
        return await self.get("/inspect", {"fqcn": fqcn})

    async def get_docs(self, fqcn: str) -> Any:
        """Scaladoc for the symbol named by a fully-qualified name."""
        return await self.get("/docs", {"fqcn": fqcn})
