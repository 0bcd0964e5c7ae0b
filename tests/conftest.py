# ruff: noqa: E402
import os

# Set testing environment flags before importing settings
os.environ["APP_ENV"] = "test"
os.environ["REDIS_URL"] = ""
os.environ["SOLR_ENABLED"] = "0"
os.environ.pop("SEARCH_DOCUMENTS_PATH", None)

import pytest
from fastapi.testclient import TestClient

from search_spellcheck.core.app_factory import create_app
from search_spellcheck.core.cache import reset_cache_bins
from search_spellcheck.core.config import settings
from search_spellcheck.modules.search.local_backend import LocalSearchBackend
from search_spellcheck.modules.spellcheck.area import SpellcheckArea
from search_spellcheck.modules.views.defaults import SAMPLE_DOCUMENTS, build_default_registry
from search_spellcheck.modules.views.filters import FulltextFilter
from search_spellcheck.modules.views.view import AreaConfig, View

# Force Redis off during tests to avoid real network calls.
settings.__class__.redis_client = None


@pytest.fixture(autouse=True)
def fresh_cache_bins():
    """Every test starts with empty, process-local cache bins."""
    settings.__class__.redis_client = None
    reset_cache_bins()
    yield
    reset_cache_bins()


@pytest.fixture
def make_view():
    """Build a view with one fulltext filter and a spellcheck header area."""

    def _make(
        backend,
        *,
        exposed_input=None,
        options=None,
        live_preview=False,
        view_id="search",
        display_id="page_1",
        identifier="query",
    ):
        view = View(
            view_id,
            backend,
            index_id="content",
            display_id=display_id,
            filters=[FulltextFilter("search_api_fulltext", expose_identifier=identifier)],
            areas=[AreaConfig("header", SpellcheckArea, dict(options or {}))],
        )
        view.set_exposed_input(exposed_input or {})
        view.set_request("/search", exposed_input or {})
        view.live_preview = live_preview
        return view

    return _make


@pytest.fixture
def local_backend():
    return LocalSearchBackend(SAMPLE_DOCUMENTS)


@pytest.fixture
def client(local_backend):
    app = create_app(
        registry=build_default_registry(local_backend),
        backend=local_backend,
        configure_logging=False,
    )
    with TestClient(app) as test_client:
        yield test_client
