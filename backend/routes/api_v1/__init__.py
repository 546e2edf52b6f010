"""API v1: highlights endpoints."""

from fastapi import APIRouter

from .highlights import router as highlights_router

router = APIRouter(prefix="/api/v1", tags=["api_v1"])
router.include_router(highlights_router)

api_v1_router = router
