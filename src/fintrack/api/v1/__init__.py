"""API version 1 routes."""

from fastapi import APIRouter

from fintrack.api.v1 import (
    auth,
    categories,
    category_rules,
    category_splits,
    category_suggestions,
    transactions,
)

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(categories.router)
router.include_router(category_rules.router)
router.include_router(transactions.router)
router.include_router(category_splits.router)
router.include_router(category_suggestions.router)
