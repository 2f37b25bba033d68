"""Pydantic schemas for request/response validation."""

from product_proxy.schemas.error import ErrorDetail, ValidationErrorResponse
from product_proxy.schemas.product import (
    Product,
    ProductCreate,
    ProductPatch,
    ProductUpdate,
)

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductPatch",
    "ErrorDetail",
    "ValidationErrorResponse",
]
