"""Shared test helpers: in-memory database, fast settings, and row builders."""

from pydantic import SecretStr
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from budget_ledger.core.config import Settings
from budget_ledger.core.database import Database
from budget_ledger.models import Category, User
from budget_ledger.schemas.auth import CurrentUser

TEST_JWT_SECRET = "test-secret-key"


def make_settings(**overrides: object) -> Settings:
    """Settings with a low bcrypt cost and a fixed JWT secret."""
    values: dict[str, object] = {
        "BCRYPT_ROUNDS": 4,
        "JWT_SECRET": SecretStr(TEST_JWT_SECRET),
        "JWT_ALGORITHM": "HS256",
        "JWT_EXPIRE_MINUTES": 1440,
    }
    values.update(overrides)
    return Settings(**values)


def make_database() -> Database:
    """Fresh in-memory SQLite database with all tables (single shared connection)."""
    database = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.create_all()
    return database


def add_user(
    db: Session,
    role: str = "user",
    email: str | None = None,
    name: str = "Test User",
) -> CurrentUser:
    """Insert a user row directly and return it as an authenticated actor."""
    user = User(
        name=name,
        email=email or f"{role}-{db.query(User).count() + 1}@example.com",
        password_hash="not-a-real-hash",
        role=role,
    )
    db.add(user)
    db.commit()
    return CurrentUser(id=user.id, role=user.role, email=user.email)


def add_category(db: Session, name: str) -> int:
    """Insert a category row directly and return its id."""
    category = Category(name=name)
    db.add(category)
    db.commit()
    return category.id
