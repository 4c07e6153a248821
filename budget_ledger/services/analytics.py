"""
Read-only analytics over a user's ledger.

Totals are summed in SQL over NUMERIC columns and handled as Decimal
afterwards; results are quantized to cents. Nothing here mutates storage.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from budget_ledger.models import Category, Transaction
from budget_ledger.schemas.analytics import CategoryTotal, MonthlyTotals, OverviewResponse
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.services.access_policy import Operation, authorize
from budget_ledger.services.errors import ValidationError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
MONTHS = range(1, 13)


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be an integer.") from e


def validate_period(year: Any, month: Any = None) -> tuple[int, int | None]:
    """Return (year, month) as ints; year is required, month optional (1-12)."""
    if year is None or year == "":
        raise ValidationError("Year is required.")
    year_int = _to_int(year, "Year")
    if not 1 <= year_int <= 9999:
        raise ValidationError("Year must be between 1 and 9999.")
    if month is None or month == "":
        return year_int, None
    month_int = _to_int(month, "Month")
    if month_int not in MONTHS:
        raise ValidationError("Month must be between 1 and 12.")
    return year_int, month_int


def _money(value: Any) -> Decimal:
    """Normalize a SQL SUM result (Decimal, float, int or None) to cents."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS)


def _period_filters(user_id: int, year: int, month: int | None) -> list[Any]:
    filters = [
        Transaction.user_id == user_id,
        extract("year", Transaction.date) == year,
    ]
    if month is not None:
        filters.append(extract("month", Transaction.date) == month)
    return filters


def overview(
    db: Session, actor: CurrentUser, year: Any, month: Any = None
) -> OverviewResponse:
    """Income, expense and net (income - expense) for the year or year+month."""
    authorize(actor, Operation.READ_ANALYTICS)
    year, month = validate_period(year, month)
    rows = (
        db.query(Transaction.type, func.sum(Transaction.amount))
        .filter(*_period_filters(actor.id, year, month))
        .group_by(Transaction.type)
        .all()
    )
    totals = {tx_type: _money(total) for tx_type, total in rows}
    income = totals.get("income", ZERO)
    expense = totals.get("expense", ZERO)
    return OverviewResponse(income=income, expense=expense, net=income - expense)


def category_breakdown(
    db: Session, actor: CurrentUser, year: Any, month: Any = None
) -> list[CategoryTotal]:
    """Expense totals per category name. Categories without expenses are omitted."""
    authorize(actor, Operation.READ_ANALYTICS)
    year, month = validate_period(year, month)
    rows = (
        db.query(Category.name, func.sum(Transaction.amount))
        .join(Category, Transaction.category_id == Category.id)
        .filter(Transaction.type == "expense", *_period_filters(actor.id, year, month))
        .group_by(Category.name)
        .all()
    )
    return [CategoryTotal(category=name, total=_money(total)) for name, total in rows]


def income_vs_expense(db: Session, actor: CurrentUser, year: Any) -> list[MonthlyTotals]:
    """Twelve entries (months 1-12) of income and expense, zero-filled."""
    authorize(actor, Operation.READ_ANALYTICS)
    year, _ = validate_period(year)
    month_expr = extract("month", Transaction.date)
    rows = (
        db.query(month_expr, Transaction.type, func.sum(Transaction.amount))
        .filter(*_period_filters(actor.id, year, None))
        .group_by(month_expr, Transaction.type)
        .all()
    )
    by_month: dict[int, dict[str, Decimal]] = {
        m: {"income": ZERO, "expense": ZERO} for m in MONTHS
    }
    for month, tx_type, total in rows:
        bucket = by_month.get(int(month))
        if bucket is not None and tx_type in bucket:
            bucket[tx_type] = _money(total)
    return [
        MonthlyTotals(month=m, income=by_month[m]["income"], expense=by_month[m]["expense"])
        for m in MONTHS
    ]
