"""Registration, login, and the bearer-token dependency (get_current_user)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from budget_ledger.core.config import Settings, get_settings
from budget_ledger.core.database import get_db
from budget_ledger.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from budget_ledger.schemas.common import MessageResponse
from budget_ledger.services import identity

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """
    Create an account. Role is optional; anything other than admin, user or
    read-only falls back to user. Returns 409 if the email is taken.
    """
    message = identity.register_user(
        db,
        settings,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return MessageResponse(message=message)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the public profile.
    Include the token in the Authorization header as: Bearer <token>
    """
    return identity.login(db, settings, email=body.email, password=body.password)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return its claims. 401 if missing, 403 if invalid."""
    token = credentials.credentials if credentials is not None else None
    return identity.verify_token(token, settings)
