"""ORM model for transaction categories."""

from sqlalchemy import Column, Integer, String

from budget_ledger.models.base import Base


class Category(Base):
    """Flat, admin-managed category referenced by transactions."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
