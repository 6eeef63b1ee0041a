"""Central API router composition.

This module is responsible for mounting individual route modules on the main app
router and providing a single import point for `FastAPI.include_router(...)`.
"""

from fastapi import APIRouter

from .diagnostics import router as diagnostics_router
from .goals import router as goals_router
from .players import router as players_router
from .stats import router as stats_router

router = APIRouter(prefix="/api", tags=["api"])

router.include_router(stats_router)
router.include_router(players_router)
router.include_router(goals_router)
router.include_router(diagnostics_router)
