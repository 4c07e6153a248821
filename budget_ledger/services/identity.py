"""Identity service: registration, credential check, and session token verification."""

import logging
import re
from typing import TYPE_CHECKING

import jwt
from sqlalchemy.orm import Session

from budget_ledger.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from budget_ledger.models import User
from budget_ledger.schemas.auth import CurrentUser, LoginResponse, UserProfile
from budget_ledger.services.access_policy import DEFAULT_ROLE, VALID_ROLES
from budget_ledger.services.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    UnauthenticatedError,
    ValidationError,
)
from budget_ledger.services.persistence import commit_or_raise

if TYPE_CHECKING:
    from budget_ledger.core.config import Settings

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

INVALID_CREDENTIALS = "Invalid credentials."


def resolve_role(requested: str | None) -> str:
    """Return the requested role if valid, else the default role."""
    if requested and requested in VALID_ROLES:
        return requested
    return DEFAULT_ROLE


def _validate_registration(name: str, email: str, password: str) -> None:
    if not name or not email or not password:
        raise ValidationError("Name, email, and password are required.")
    if len(name) > NAME_MAX_LEN:
        raise ValidationError("Name is too long.")
    if len(email) > EMAIL_MAX_LEN or not _EMAIL_RE.match(email):
        raise ValidationError("Valid email is required.")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )


def register_user(
    db: Session,
    settings: "Settings",
    name: str | None,
    email: str | None,
    password: str | None,
    role: str | None = None,
) -> str:
    """
    Create a user with a bcrypt-hashed password and return an acknowledgment.

    Raises ValidationError for missing/malformed input and ConflictError when
    the email is already registered. An invalid role is coerced to 'user'.
    """
    name = (name or "").strip()
    email = (email or "").strip()
    password = password or ""
    _validate_registration(name, email, password)

    if db.query(User.id).filter(User.email == email).first() is not None:
        raise ConflictError("Email already registered.")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password, rounds=settings.BCRYPT_ROUNDS),
        role=resolve_role(role),
    )
    db.add(user)
    commit_or_raise(db, on_integrity=ConflictError("Email already registered."))
    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return "User registered successfully."


def login(
    db: Session,
    settings: "Settings",
    email: str | None,
    password: str | None,
) -> LoginResponse:
    """
    Verify credentials and issue a signed, time-bound token.

    Unknown email and wrong password raise the same AuthenticationError.
    """
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = db.query(User).filter(User.email == email.strip()).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info(
            "Login failed",
            extra={"reason": "unknown_email" if user is None else "bad_password"},
        )
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = create_access_token(
        sub=user.id, role=user.role, email=user.email, settings=settings
    )
    return LoginResponse(token=token, user=UserProfile.model_validate(user))


def verify_token(token: str | None, settings: "Settings") -> CurrentUser:
    """
    Validate a bearer token and return its embedded claims.

    The credential store is not consulted; claims are trusted until expiry.
    """
    if not token:
        raise UnauthenticatedError("No token provided.")
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid or expired token.") from e

    role = payload.get("role")
    email = payload.get("email")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload.") from e
    if not isinstance(role, str) or not isinstance(email, str):
        raise InvalidTokenError("Invalid token payload.")
    return CurrentUser(id=user_id, role=role, email=email)
