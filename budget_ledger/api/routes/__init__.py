"""API routes mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from budget_ledger.api.routes import analytics, auth, categories, health, transactions

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
