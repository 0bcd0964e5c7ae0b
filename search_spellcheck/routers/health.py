"""Health endpoint reporting which cache and search backends are active."""

from fastapi import APIRouter, Request

from search_spellcheck.core.cache import get_cache_bin
from search_spellcheck.core.config import settings
from search_spellcheck.modules.search.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    """Endpoint: health."""
    backend = request.app.state.search_backend
    return HealthResponse(
        status="ok",
        environment=settings.environment,
        cache_backend=get_cache_bin(settings.spellcheck_cache_bin).name,
        search_backend=type(backend).__name__ if backend is not None else "none",
    )
