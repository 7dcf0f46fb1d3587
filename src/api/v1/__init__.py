"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.sessions import group_sessions_router
from api.v1.routes.sessions import router as sessions_router
from api.v1.routes.votes import router as votes_router

router = APIRouter()
router.include_router(group_sessions_router)
router.include_router(sessions_router)
router.include_router(votes_router)
