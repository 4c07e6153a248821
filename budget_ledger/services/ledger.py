"""
Transaction ledger: owned income/expense records.

Every operation is role-gated through the access policy before touching
storage, and every lookup by id is ownership-checked. A record owned by
someone else is reported exactly like a missing one.
"""

import datetime as dt
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from budget_ledger.models import Category, Transaction
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.schemas.transaction import TRANSACTION_TYPES, TransactionOut
from budget_ledger.services.access_policy import Operation, authorize, owns
from budget_ledger.services.errors import (
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from budget_ledger.services.persistence import commit_or_raise

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("category_id", "type", "amount", "description", "date")

# NUMERIC(12, 2): at most 10 integer digits and 2 decimal places.
AMOUNT_MAX = Decimal("9999999999.99")
AMOUNT_QUANTUM = Decimal("0.01")

NOT_FOUND_MESSAGE = "Transaction not found."

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_MESSAGE = "Date must be valid (YYYY-MM-DD)."


def _to_out(row: Transaction, category_name: str) -> TransactionOut:
    return TransactionOut(
        id=row.id,
        user_id=row.user_id,
        category_id=row.category_id,
        category=category_name,
        type=row.type,
        amount=row.amount,
        description=row.description or "",
        date=row.date,
    )


def _validate_type(value: Any) -> str:
    if value not in TRANSACTION_TYPES:
        raise ValidationError("Type must be income or expense.")
    return value


def _validate_amount(value: Any) -> Decimal:
    """Coerce to Decimal and require 0 < amount with at most two decimal places."""
    if isinstance(value, bool):
        raise ValidationError("Amount must be a positive number.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError("Amount must be a positive number.") from e
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be a positive number.")
    if amount > AMOUNT_MAX:
        raise ValidationError("Amount is too large.")
    if amount != amount.quantize(AMOUNT_QUANTUM):
        raise ValidationError("Amount must have at most two decimal places.")
    return amount.quantize(AMOUNT_QUANTUM)


def _validate_date(value: Any) -> dt.date:
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and DATE_PATTERN.fullmatch(value):
        try:
            return dt.date.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(DATE_MESSAGE) from e
    raise ValidationError(DATE_MESSAGE)


def _require_category(db: Session, category_id: Any) -> int:
    if isinstance(category_id, bool) or not isinstance(category_id, int):
        raise ValidationError("Category ID must be an integer.")
    if db.get(Category, category_id) is None:
        raise InvalidReferenceError("Category does not exist.")
    return category_id


def _get_owned(db: Session, actor: CurrentUser, transaction_id: int) -> Transaction:
    row = db.get(Transaction, transaction_id)
    if row is None or not owns(actor.id, row.user_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return row


def list_transactions(db: Session, actor: CurrentUser) -> list[TransactionOut]:
    """Return the actor's transactions, newest date first (ties: newest insert first)."""
    authorize(actor, Operation.READ_TRANSACTIONS)
    rows = (
        db.query(Transaction, Category.name)
        .join(Category, Transaction.category_id == Category.id)
        .filter(Transaction.user_id == actor.id)
        .order_by(Transaction.date.desc(), Transaction.id.desc())
        .all()
    )
    return [_to_out(row, category_name) for row, category_name in rows]


def get_transaction(db: Session, actor: CurrentUser, transaction_id: int) -> TransactionOut:
    """Return one owned transaction or raise NotFoundError."""
    authorize(actor, Operation.READ_TRANSACTIONS)
    result = (
        db.query(Transaction, Category.name)
        .join(Category, Transaction.category_id == Category.id)
        .filter(Transaction.id == transaction_id)
        .first()
    )
    if result is None or not owns(actor.id, result[0].user_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    row, category_name = result
    return _to_out(row, category_name)


def create_transaction(
    db: Session,
    actor: CurrentUser,
    category_id: Any,
    type: Any,
    amount: Any,
    date: Any,
    description: str | None = None,
) -> str:
    """
    Persist a new transaction owned by the actor and return an acknowledgment.

    Not idempotent: calling twice creates two records.
    """
    authorize(actor, Operation.WRITE_TRANSACTIONS)
    if category_id is None or not type or amount is None or amount == "" or not date:
        raise ValidationError("Missing required fields.")

    row = Transaction(
        user_id=actor.id,
        type=_validate_type(type),
        amount=_validate_amount(amount),
        date=_validate_date(date),
        description=description or "",
        category_id=_require_category(db, category_id),
    )
    db.add(row)
    commit_or_raise(db, on_integrity=InvalidReferenceError("Category does not exist."))
    logger.info(
        "Transaction created",
        extra={"transaction_id": row.id, "actor_id": actor.id, "type": row.type},
    )
    return "Transaction created."


def update_transaction(
    db: Session,
    actor: CurrentUser,
    transaction_id: int,
    changes: dict[str, Any],
) -> str:
    """
    Apply a partial update to an owned transaction.

    Only fields present in changes are considered. A present field whose value
    is empty, zero or None keeps the stored value instead of being rejected.
    """
    authorize(actor, Operation.WRITE_TRANSACTIONS)
    row = _get_owned(db, actor, transaction_id)

    validators = {
        "category_id": lambda v: _require_category(db, v),
        "type": _validate_type,
        "amount": _validate_amount,
        "date": _validate_date,
        "description": str,
    }
    # All supplied fields are validated before any is applied.
    updates = {
        field: validators[field](changes[field])
        for field in UPDATABLE_FIELDS
        if changes.get(field)
    }
    for field, value in updates.items():
        setattr(row, field, value)

    commit_or_raise(db, on_integrity=InvalidReferenceError("Category does not exist."))
    logger.info(
        "Transaction updated",
        extra={"transaction_id": transaction_id, "actor_id": actor.id},
    )
    return "Transaction updated."


def delete_transaction(db: Session, actor: CurrentUser, transaction_id: int) -> str:
    """Remove an owned transaction irreversibly."""
    authorize(actor, Operation.WRITE_TRANSACTIONS)
    row = _get_owned(db, actor, transaction_id)
    db.delete(row)
    commit_or_raise(db)
    logger.info(
        "Transaction deleted",
        extra={"transaction_id": transaction_id, "actor_id": actor.id},
    )
    return "Transaction deleted."
