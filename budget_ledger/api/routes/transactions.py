"""Transaction endpoints. Every route is scoped to the authenticated user's own records."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from budget_ledger.api.routes.auth import get_current_user
from budget_ledger.core.database import get_db
from budget_ledger.schemas.auth import CurrentUser
from budget_ledger.schemas.common import MessageResponse
from budget_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
)
from budget_ledger.services import ledger

router = APIRouter()


@router.get("", response_model=list[TransactionOut])
def list_transactions(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[TransactionOut]:
    """All of the caller's transactions with category names, newest first."""
    return ledger.list_transactions(db, user)


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    transaction_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TransactionOut:
    return ledger.get_transaction(db, user, transaction_id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    body: TransactionCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """
    Record an income or expense (admin and user roles only).

    Requires category_id, type (income or expense), a positive amount and a
    YYYY-MM-DD date; description is optional.
    """
    message = ledger.create_transaction(
        db,
        user,
        category_id=body.category_id,
        type=body.type,
        amount=body.amount,
        date=body.date,
        description=body.description,
    )
    return MessageResponse(message=message)


@router.put("/{transaction_id}", response_model=MessageResponse)
def update_transaction(
    transaction_id: int,
    body: TransactionUpdate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Partially update an owned transaction; omitted or empty fields keep their value."""
    changes = body.model_dump(exclude_unset=True)
    return MessageResponse(message=ledger.update_transaction(db, user, transaction_id, changes))


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    return MessageResponse(message=ledger.delete_transaction(db, user, transaction_id))
