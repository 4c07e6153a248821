"""Commit helper that maps storage failures onto service errors."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from budget_ledger.services.errors import ServiceError, StorageError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, on_integrity: ServiceError | None = None) -> None:
    """
    Commit the session; on failure roll back and raise a service error.

    on_integrity is raised for constraint violations (duplicate key, dangling
    foreign key) when given; everything else becomes an opaque StorageError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if on_integrity is not None:
            raise on_integrity from e
        logger.exception("Integrity error on commit")
        raise StorageError("Server error.") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Storage error on commit")
        raise StorageError("Server error.") from e
