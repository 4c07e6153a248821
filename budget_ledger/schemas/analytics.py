"""Response schemas for analytics endpoints."""

from pydantic import BaseModel, Field

from budget_ledger.schemas.common import Money


class OverviewResponse(BaseModel):
    """Income, expense and net totals for a period."""

    income: Money
    expense: Money
    net: Money = Field(..., description="income - expense")


class CategoryTotal(BaseModel):
    """Expense total for one category."""

    category: str
    total: Money


class MonthlyTotals(BaseModel):
    """Income and expense totals for one calendar month."""

    month: int = Field(..., ge=1, le=12)
    income: Money
    expense: Money
