"""Business logic services."""

from product_proxy.services.product_gateway import ProductGateway, filter_and_paginate

__all__ = [
    "ProductGateway",
    "filter_and_paginate",
]
