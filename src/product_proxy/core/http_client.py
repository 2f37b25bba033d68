from typing import Optional

import httpx

from product_proxy.core.config import settings

http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared upstream HTTP client."""
    global http_client
    if http_client is None:
        http_client = httpx.AsyncClient(
            base_url=settings.MOCK_API_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
            limits=httpx.Limits(
                max_connections=100,           # Shared by all in-flight requests
                max_keepalive_connections=20,
            ),
        )
    return http_client


async def close_http_client() -> None:
    """Close the shared client and release its connection pool."""
    global http_client
    if http_client is not None:
        await http_client.aclose()
        http_client = None
