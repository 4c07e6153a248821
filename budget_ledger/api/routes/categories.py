"""Category endpoints: list (any role) and create (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from budget_ledger.api.routes.auth import get_current_user
from budget_ledger.core.database import get_db
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.schemas.category import CategoryCreate, CategoryOut
from budget_ledger.schemas.common import MessageResponse
from budget_ledger.services import categories

router = APIRouter()


@router.get("", response_model=list[CategoryOut])
def list_categories(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[CategoryOut]:
    """Return all categories ordered by name."""
    return categories.list_categories(db, user)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Add a category (admin only). Returns 409 if the name already exists."""
    return MessageResponse(message=categories.create_category(db, user, body.name))
