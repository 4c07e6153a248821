"""
Create the demo accounts (one per role). Safe to run repeatedly:
  python -m budget_ledger.scripts.seed_demo
"""

import logging
import sys

from sqlalchemy.orm import Session

from budget_ledger.core.config import Settings, get_settings
from budget_ledger.core.database import Database
from budget_ledger.core.logs import configure_logging
from budget_ledger.services.errors import ConflictError
from budget_ledger.services.identity import register_user

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[tuple[str, str, str, str], ...] = (
    ("Admin User", "admin@demo.com", "admin123", "admin"),
    ("Regular User", "user@demo.com", "user123", "user"),
    ("Read Only User", "readonly@demo.com", "readonly123", "read-only"),
)


def seed_demo_users(db: Session, settings: Settings) -> int:
    """Register each demo account that does not exist yet; return how many were created."""
    created = 0
    for name, email, password, role in DEMO_USERS:
        try:
            register_user(db, settings, name, email, password, role)
        except ConflictError:
            logger.info("Demo user already exists: %s", email)
            continue
        created += 1
    return created


def main() -> int:
    configure_logging(logging.INFO)
    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    db = database.session()
    try:
        created = seed_demo_users(db, settings)
        logger.info("Demo seeding completed: users_created=%s", created)
        for _, email, password, role in DEMO_USERS:
            logger.info("%s: %s / %s", role, email, password)
        return 0
    except Exception as e:
        logger.exception("Demo seeding failed: %s", e)
        return 1
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
