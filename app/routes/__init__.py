"""APIRouter registration for the asset store service."""

from __future__ import annotations

from fastapi import APIRouter

from app.routes.assets import router as assets_router

api_router = APIRouter()
api_router.include_router(assets_router, tags=["Assets"])

__all__ = ["api_router"]
