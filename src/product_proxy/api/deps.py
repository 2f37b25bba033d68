"""API dependencies for upstream access."""

from typing import Annotated

from fastapi import Depends

from product_proxy.core.config import settings
from product_proxy.core.http_client import get_http_client
from product_proxy.services.product_gateway import ProductGateway


def get_product_gateway() -> ProductGateway:
    """Build a gateway around the shared upstream client."""
    return ProductGateway(
        get_http_client(),
        errors_as_not_found=settings.UPSTREAM_GET_ERRORS_AS_NOT_FOUND,
    )


Gateway = Annotated[ProductGateway, Depends(get_product_gateway)]
