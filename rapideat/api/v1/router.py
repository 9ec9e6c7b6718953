"""
Main API v1 router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .restaurants import router as restaurants_router

api_router = APIRouter()

api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    restaurants_router,
    prefix="/restaurants",
    tags=["Restaurants"],
)
