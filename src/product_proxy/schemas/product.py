"""Product schemas for request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


class Product(BaseModel):
    """Product as stored by the upstream object API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    data: dict[str, Any] | None = None
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class ProductCreate(BaseModel):
    """Schema for product creation request."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    data: dict[str, Any]


class ProductUpdate(BaseModel):
    """Schema for full product replacement request."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    data: dict[str, Any]


class ProductPatch(BaseModel):
    """Schema for partial product update request.

    ``data`` replaces the stored mapping as a whole when supplied.
    """

    name: str | None = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    data: dict[str, Any] | None = None

    @model_validator(mode="after")
    def require_a_field(self) -> "ProductPatch":
        if not self.to_upstream():
            raise ValueError("At least one of name or data must be provided")
        return self

    def to_upstream(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
