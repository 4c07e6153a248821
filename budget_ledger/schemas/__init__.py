"""Pydantic request/response schemas."""

from budget_ledger.schemas.analytics import CategoryTotal, MonthlyTotals, OverviewResponse
from budget_ledger.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserProfile,
)
from budget_ledger.schemas.category import CategoryCreate, CategoryOut
from budget_ledger.schemas.common import MessageResponse, Money
from budget_ledger.schemas.health import HealthResponse
from budget_ledger.schemas.transaction import (
    TRANSACTION_TYPES,
    TransactionCreate,
    TransactionOut,
    TransactionType,
    TransactionUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryOut",
    "CategoryTotal",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Money",
    "MonthlyTotals",
    "OverviewResponse",
    "RegisterRequest",
    "TRANSACTION_TYPES",
    "TransactionCreate",
    "TransactionOut",
    "TransactionType",
    "TransactionUpdate",
    "UserProfile",
]
