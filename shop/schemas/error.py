"""
Response schemas shared by every endpoint for errors and confirmations.
"""
from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Uniform error body; ``errors`` maps field names to messages."""

    message: str
    errors: Optional[dict[str, str]] = None


class MessageResponse(BaseModel):
    """Confirmation body for operations that return no resource."""

    message: str
