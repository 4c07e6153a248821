"""Core app configuration, database and security primitives."""

from budget_ledger.core.config import Settings, get_settings, settings
from budget_ledger.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_settings", "settings", "get_db"]
