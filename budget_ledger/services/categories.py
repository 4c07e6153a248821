"""Category catalog: flat, admin-managed list readable by every role."""

import logging

from sqlalchemy.orm import Session

from budget_ledger.models import Category
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.schemas.category import CategoryOut
from budget_ledger.services.access_policy import Operation, authorize
from budget_ledger.services.errors import ConflictError, ValidationError
from budget_ledger.services.persistence import commit_or_raise

logger = logging.getLogger(__name__)


def list_categories(db: Session, actor: CurrentUser) -> list[CategoryOut]:
    """Return all categories ordered by name."""
    authorize(actor, Operation.READ_CATEGORIES)
    rows = db.query(Category).order_by(Category.name.asc()).all()
    return [CategoryOut.model_validate(row) for row in rows]


def create_category(db: Session, actor: CurrentUser, name: str | None) -> str:
    """Create a category (admin only). Duplicate names raise ConflictError."""
    authorize(actor, Operation.CREATE_CATEGORY)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required.")

    db.add(Category(name=name))
    commit_or_raise(db, on_integrity=ConflictError("Category already exists."))
    logger.info("Category created", extra={"category_name": name, "actor_id": actor.id})
    return "Category added."
