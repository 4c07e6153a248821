"""Service layer: identity, access policy, categories, ledger, analytics."""
