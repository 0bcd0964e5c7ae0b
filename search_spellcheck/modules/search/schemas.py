"""Pydantic schemas for the search view endpoint."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class RenderedArea(BaseModel):
    """One area handler's output: render elements plus their HTML."""

    handler: str
    region: str
    elements: List[Dict[str, Any]] = Field(default_factory=list)
    html: str = ""


class SearchViewResponse(BaseModel):
    """API response for a rendered search view."""

    view_id: str
    display_id: str
    keys: str = ""
    total: int
    results: List[Dict[str, Any]]
    areas: List[RenderedArea] = Field(default_factory=list)
    corrections: Dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    environment: str
    cache_backend: str
    search_backend: str


__all__ = ["HealthResponse", "RenderedArea", "SearchViewResponse"]
