from product_proxy.core.config import settings
from product_proxy.core.exceptions import (
    ProductProxyError,
    UnexpectedUpstreamResponseError,
    UpstreamUnavailableError,
)
from product_proxy.core.http_client import close_http_client, get_http_client
from product_proxy.core.logging import configure_logging

__all__ = [
    "settings",
    "get_http_client",
    "close_http_client",
    "configure_logging",
    "ProductProxyError",
    "UpstreamUnavailableError",
    "UnexpectedUpstreamResponseError",
]
