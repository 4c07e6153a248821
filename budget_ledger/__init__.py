"""Budget ledger API: authenticated income/expense ledger with analytics."""

__version__ = "0.1.0"
