"""Search domain package: query objects, backends and response schemas."""

from .local_backend import LocalSearchBackend
from .query import SOLR_RESPONSE_KEY, SPELLCHECK_OPTION, ResultSet, SearchQuery
from .schemas import HealthResponse, RenderedArea, SearchViewResponse
from .solr_client import SolrBackend, get_solr_backend

__all__ = [
    "HealthResponse",
    "LocalSearchBackend",
    "RenderedArea",
    "ResultSet",
    "SOLR_RESPONSE_KEY",
    "SPELLCHECK_OPTION",
    "SearchQuery",
    "SearchViewResponse",
    "SolrBackend",
    "get_solr_backend",
]
