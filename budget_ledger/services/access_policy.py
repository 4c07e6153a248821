"""
Role-based access control: one decision table consulted by every service.

Pure functions only. Ownership is checked separately from role gating and
applies to every role, admin included.
"""

from enum import Enum

from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.services.errors import ForbiddenError

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_READ_ONLY = "read-only"
VALID_ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_USER, ROLE_READ_ONLY)
DEFAULT_ROLE = ROLE_USER


class Operation(str, Enum):
    """Operation kinds the policy knows about."""

    READ_TRANSACTIONS = "read_transactions"
    WRITE_TRANSACTIONS = "write_transactions"
    READ_ANALYTICS = "read_analytics"
    READ_CATEGORIES = "read_categories"
    CREATE_CATEGORY = "create_category"


_ALL_ROLES = frozenset(VALID_ROLES)

POLICY: dict[Operation, frozenset[str]] = {
    Operation.READ_TRANSACTIONS: _ALL_ROLES,
    Operation.READ_ANALYTICS: _ALL_ROLES,
    Operation.READ_CATEGORIES: _ALL_ROLES,
    Operation.WRITE_TRANSACTIONS: frozenset({ROLE_ADMIN, ROLE_USER}),
    Operation.CREATE_CATEGORY: frozenset({ROLE_ADMIN}),
}

_DENY_MESSAGES: dict[Operation, str] = {
    Operation.CREATE_CATEGORY: "Forbidden: admin only.",
}


def is_allowed(role: str | None, operation: Operation) -> bool:
    """True if the role may perform the operation. Unknown roles are denied."""
    if not role:
        return False
    return role in POLICY.get(operation, frozenset())


def owns(actor_id: int, owner_id: int | None) -> bool:
    """Ownership check: the resource's owner id must equal the acting user's id."""
    return owner_id is not None and actor_id == owner_id


def authorize(actor: CurrentUser, operation: Operation) -> None:
    """Raise ForbiddenError unless the actor's role allows the operation."""
    if not is_allowed(actor.role, operation):
        raise ForbiddenError(
            _DENY_MESSAGES.get(operation, "Forbidden: insufficient privileges.")
        )
