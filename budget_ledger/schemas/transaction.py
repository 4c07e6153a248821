"""Request/response schemas for transaction endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from budget_ledger.schemas.common import Money

TransactionType = Literal["income", "expense"]
TRANSACTION_TYPES: tuple[str, ...] = ("income", "expense")


def _float_to_decimal_text(v: Any) -> Any:
    """JSON numbers arrive as floats; go through str so 0.01 stays Decimal('0.01')."""
    if isinstance(v, float):
        return str(v)
    return v


class TransactionCreate(BaseModel):
    """
    Body for creating a transaction.

    Fields are loosely typed here; business rules (positive amount, known
    type, existing category, YYYY-MM-DD date) are enforced by the ledger
    service so that the same checks apply outside HTTP.
    """

    category_id: int | None = None
    type: str | None = None
    amount: Decimal | None = None
    description: str | None = Field(default=None, max_length=1000)
    date: str | None = Field(default=None, description="YYYY-MM-DD")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_json_number(cls, v: Any) -> Any:
        return _float_to_decimal_text(v)


class TransactionUpdate(BaseModel):
    """
    Partial update body; only fields present in the request are considered.

    An empty string counts as no value, so the stored one is kept.
    """

    category_id: int | None = None
    type: str | None = None
    amount: Decimal | None = None
    description: str | None = Field(default=None, max_length=1000)
    date: str | None = Field(default=None, description="YYYY-MM-DD")

    @field_validator("category_id", "amount", mode="before")
    @classmethod
    def blank_as_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return _float_to_decimal_text(v)


class TransactionOut(BaseModel):
    """Transaction joined with its category name."""

    id: int
    user_id: int
    category_id: int
    category: str = Field(..., description="Category name")
    type: TransactionType
    amount: Money
    description: str
    date: dt.date
