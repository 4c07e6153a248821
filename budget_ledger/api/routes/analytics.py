"""Analytics endpoints: period overview, expense breakdown, monthly income vs expense."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_ledger.api.routes.auth import get_current_user
from budget_ledger.core.database import get_db
from budget_ledger.schemas.analytics import CategoryTotal, MonthlyTotals, OverviewResponse
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.services import analytics

router = APIRouter()

# Raw strings; analytics.validate_period parses them. An empty month means the whole year.
YearParam = Annotated[str | None, Query(description="Calendar year (required)")]
MonthParam = Annotated[str | None, Query(description="Month 1-12 (optional)")]


@router.get("/overview", response_model=OverviewResponse)
def get_overview(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    year: YearParam = None,
    month: MonthParam = None,
) -> OverviewResponse:
    """Total income, expense and net for the year (or a single month)."""
    return analytics.overview(db, user, year, month)


@router.get("/category-breakdown", response_model=list[CategoryTotal])
def get_category_breakdown(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    year: YearParam = None,
    month: MonthParam = None,
) -> list[CategoryTotal]:
    """Expense totals per category for the period; empty categories are omitted."""
    return analytics.category_breakdown(db, user, year, month)


@router.get("/income-vs-expense", response_model=list[MonthlyTotals])
def get_income_vs_expense(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    year: YearParam = None,
) -> list[MonthlyTotals]:
    """Twelve monthly entries of income and expense for the year, zero-filled."""
    return analytics.income_vs_expense(db, user, year)
