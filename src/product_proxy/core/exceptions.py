"""Error taxonomy for calls made to the upstream object store."""


class ProductProxyError(Exception):
    """Base class for errors raised while proxying product operations."""

    status_code: int = 500
    public_message: str = "An unexpected error occurred."


class UpstreamUnavailableError(ProductProxyError):
    """The upstream call failed at the transport level or returned a failure status."""

    status_code = 503
    public_message = "External service unavailable."

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class UnexpectedUpstreamResponseError(ProductProxyError):
    """Upstream reported success but its body could not be turned into a product."""

    status_code = 500
