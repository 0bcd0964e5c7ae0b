"""Centralized API router registration."""

from fastapi import APIRouter

from search_spellcheck.routers import health, search

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(search.router)

__all__ = ["api_router"]
