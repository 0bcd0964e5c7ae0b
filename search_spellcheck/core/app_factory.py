"""Application factory helpers to keep search_spellcheck/main.py lightweight."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from search_spellcheck.api.router import api_router
from search_spellcheck.core.config import settings
from search_spellcheck.core.error_handlers import register_exception_handlers
from search_spellcheck.core.logging_config import setup_logging
from search_spellcheck.core.middleware import LoggingMiddleware
from search_spellcheck.modules.views.defaults import build_default_registry, get_search_backend
from search_spellcheck.modules.views.registry import ViewRegistry

logger = logging.getLogger(__name__)


def create_app(
    *,
    registry: Optional[ViewRegistry] = None,
    backend=None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    `registry`/`backend` override the default `content` views and their search backend.
    """
    if configure_logging:
        setup_logging(
            log_level=settings.log_level,
            log_dir=settings.log_dir,
            use_json=settings.use_json_logs,
            use_colors=settings.environment.lower() in ("development", "dev"),
        )

    app = FastAPI(title=settings.SITE_NAME)
    app.state.environment = settings.environment
    if registry is None:
        backend = backend if backend is not None else get_search_backend()
        registry = build_default_registry(backend)
    app.state.views = registry
    app.state.search_backend = backend

    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    logger.info(f"Registered views: {', '.join(registry.ids()) or 'none'}")
    return app
