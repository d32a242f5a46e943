"""API Routes for RuleCraft."""

from .attributes_router import router as attributes_router
from .rules_router import router as rules_router

__all__ = [
    "attributes_router",
    "rules_router",
]
