"""
Create a user from the shell. Run from project root:
  python -m budget_ledger.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m budget_ledger.scripts.create_user "Ada Admin" ada@example.com s3cret-pass admin
"""
import argparse
import sys

from budget_ledger.core.config import get_settings
from budget_ledger.core.database import Database
from budget_ledger.services.access_policy import VALID_ROLES
from budget_ledger.services.errors import ServiceError
from budget_ledger.services.identity import register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Budget Ledger user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=list(VALID_ROLES))
    args = parser.parse_args(argv)

    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    db = database.session()
    try:
        register_user(db, settings, args.name, args.email, args.password, args.role)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"Created user '{args.email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
