"""Shared schema types."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

# Fixed-point amount; computed as Decimal, rendered as a JSON number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class MessageResponse(BaseModel):
    """Acknowledgment body for successful mutations."""

    message: str = Field(..., description="Human-readable outcome")
