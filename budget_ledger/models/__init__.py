"""SQLAlchemy ORM models."""

from budget_ledger.models.base import Base
from budget_ledger.models.category import Category
from budget_ledger.models.transaction import Transaction
from budget_ledger.models.user import User

__all__ = ["Base", "Category", "Transaction", "User"]
