"""Views shipped with the service and the backend they search."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from search_spellcheck.core.config import settings
from search_spellcheck.modules.search.local_backend import LocalSearchBackend
from search_spellcheck.modules.search.solr_client import get_solr_backend
from search_spellcheck.modules.spellcheck.area import SpellcheckArea
from search_spellcheck.modules.views.filters import FieldFilter, FulltextFilter
from search_spellcheck.modules.views.registry import ViewRegistry
from search_spellcheck.modules.views.view import AreaConfig, View

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENTS: List[dict] = [
    {"id": 1, "type": "article", "title": "Spelling test basics", "body": "How search engines test spelling and suggest corrections."},
    {"id": 2, "type": "article", "title": "Caching search results", "body": "Result caches keyed by query state keep repeated searches fast."},
    {"id": 3, "type": "page", "title": "Library opening hours", "body": "The library opens at nine and closes at six."},
    {"id": 4, "type": "article", "title": "Full text search with Solr", "body": "Solr ranks documents and returns spellcheck suggestions."},
    {"id": 5, "type": "page", "title": "Contact the editorial team", "body": "Send corrections and questions to the editorial team."},
]


def load_documents(path: Optional[str]) -> List[dict]:
    """Documents from a JSON file, or the bundled samples when no path is configured."""
    if not path:
        return list(SAMPLE_DOCUMENTS)
    with Path(path).open("r", encoding="utf-8") as handle:
        documents = json.load(handle)
    logger.info(f"Loaded {len(documents)} search document(s) from {path}")
    return documents


def get_search_backend():
    """Solr when enabled, otherwise an in-process index over the configured documents."""
    solr = get_solr_backend()
    if solr is not None:
        return solr
    return LocalSearchBackend(load_documents(settings.search_documents_path))


def build_default_registry(backend=None) -> ViewRegistry:
    """
    Register the `content` view.

    `page_1` shows the suggestion above results only when nothing matched; `page_2`
    always shows it.
    """
    backend = backend if backend is not None else get_search_backend()
    registry = ViewRegistry()

    def content_view(display_id: str, hide_on_result: bool):
        def factory() -> View:
            return View(
                "content",
                backend,
                index_id="content",
                display_id=display_id,
                filters=[
                    FulltextFilter("search_api_fulltext", expose_identifier="keys"),
                    FieldFilter("type", "type"),
                ],
                areas=[
                    AreaConfig(
                        "header",
                        SpellcheckArea,
                        {"filter_name": "keys", "hide_on_result": hide_on_result},
                    )
                ],
                items_per_page=settings.search_items_per_page,
            )

        return factory

    registry.register("content", content_view("page_1", True))
    registry.register("content_always", content_view("page_2", False))
    return registry
