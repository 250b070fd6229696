"""
Pydantic schemas for Product request/response validation.
"""
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shop.schemas.category import CategoryResponse


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class ProductPayload(BaseModel):
    """Full product record as sent on create and replace."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: ClassVar[dict[str, str]] = {
        "title": "This field must contain between 3 and 60 characters",
        "description": "This field must contain at most 1024 characters",
        "price": "Price must be greater than zero",
        "categoryId": "Invalid category",
    }

    id: Optional[int] = None
    title: str = Field(..., min_length=3, max_length=60)
    description: Optional[str] = Field(None, max_length=1024)
    price: Decimal = Field(..., gt=0)
    category_id: int = Field(..., gt=0)
    version: Optional[int] = Field(None, ge=1)

    @field_validator("price", mode="before")
    @classmethod
    def validate_decimal(cls, v):
        """Normalize numeric inputs to Decimal instances."""
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return Decimal(str(v))
        return v


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class ProductResponse(BaseModel):
    """Response model for product data, with the category joined in."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    title: str
    description: Optional[str]
    price: Decimal
    category_id: int
    category: Optional[CategoryResponse] = None
    version: int
