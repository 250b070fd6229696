"""
Pydantic schemas for Category request/response validation.
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CategoryPayload(BaseModel):
    """Full category record as sent on create and replace.

    ``id`` is ignored on create; on replace it must match the path id.
    ``version`` is the optimistic concurrency marker the client last read.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: ClassVar[dict[str, str]] = {
        "title": "This field must contain between 3 and 60 characters",
    }

    id: Optional[int] = None
    title: str = Field(..., min_length=3, max_length=60)
    version: Optional[int] = Field(None, ge=1)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class CategoryResponse(BaseModel):
    """Response model for category data."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    title: str
    version: int
