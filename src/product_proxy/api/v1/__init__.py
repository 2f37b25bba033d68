"""API v1 routers."""

from product_proxy.api.v1 import products

__all__ = ["products"]
