"""GraphQL transport shared by the catalog and order clients."""
from typing import Any, Optional

import httpx

from storefront.errors import GraphQLRequestError
from storefront.logging import get_logger

logger = get_logger(__name__)


class GraphQLClient:
    """POSTs `{"query", "variables"}` to the storefront backend."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        # HTTP client (lazy init unless injected)
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._http_client

    async def execute(self, query: str, variables: Optional[dict] = None) -> dict[str, Any]:
        """
        Run a query or mutation and return its `data` object.

        Raises:
            GraphQLRequestError: network failure, non-2xx status, a body that
                is not JSON, or an error payload (`errors` list, or the
                backend's top-level `error` object)
        """
        client = await self._get_http_client()
        try:
            response = await client.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"GraphQL endpoint returned {e.response.status_code}")
            raise GraphQLRequestError(f"GraphQL endpoint returned {e.response.status_code}")
        except httpx.RequestError as e:
            logger.warning(f"GraphQL endpoint unreachable: {e!s}")
            raise GraphQLRequestError(f"Failed to reach GraphQL endpoint: {e!s}")
        except ValueError:
            raise GraphQLRequestError("GraphQL endpoint returned invalid JSON")

        if not isinstance(body, dict):
            raise GraphQLRequestError("Unexpected GraphQL response")

        # Backend-level failure: {"error": {"message": ...}}
        if isinstance(body.get("error"), dict):
            raise GraphQLRequestError(body["error"].get("message") or "GraphQL request failed")

        errors = body.get("errors")
        if errors:
            messages = [e.get("message", "") for e in errors if isinstance(e, dict)]
            raise GraphQLRequestError("; ".join(m for m in messages if m) or "GraphQL request failed", errors)

        data = body.get("data")
        if not isinstance(data, dict):
            raise GraphQLRequestError("GraphQL response has no data")
        return data

    async def aclose(self) -> None:
        """Close http client if created."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
