"""Minimal Solr client for the `select` handler; cached when enabled."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import requests

from search_spellcheck.core.config import settings
from search_spellcheck.core.exceptions import SearchBackendException
from search_spellcheck.modules.search.query import (
    SOLR_RESPONSE_KEY,
    SPELLCHECK_OPTION,
    ResultSet,
    SearchQuery,
)

logger = logging.getLogger(__name__)


def escape_phrase(value) -> str:
    """Escape a value for use inside a quoted Solr phrase."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


class SolrBackend:
    def __init__(self, *, select_url: str, timeout: float = 3, default_field: str = "text"):
        self.select_url = select_url
        self.timeout = timeout
        self.default_field = default_field

    def build_params(self, query: SearchQuery) -> List[Tuple[str, str]]:
        keys = query.keys.strip()
        params = [
            ("q", keys or "*:*"),
            ("df", self.default_field),
            ("start", str(query.offset)),
            ("rows", str(query.limit)),
            ("wt", "json"),
            # Flat named lists keep spellcheck suggestions as [token, info, token, info, ...].
            ("json.nl", "flat"),
        ]
        for field, value in query.conditions:
            params.append(("fq", f'{field}:"{escape_phrase(value)}"'))
        if query.get_option(SPELLCHECK_OPTION) and keys:
            params.extend(
                [
                    ("spellcheck", "true"),
                    ("spellcheck.q", keys),
                    ("spellcheck.count", "5"),
                    ("spellcheck.onlyMorePopular", "false"),
                ]
            )
        return params

    def search(self, query: SearchQuery) -> ResultSet:
        try:
            response = requests.get(
                self.select_url, params=self.build_params(query), timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"Solr request failed for index {query.index_id}: {exc}")
            raise SearchBackendException(details={"index": query.index_id}) from exc

        body = data.get("response") or {}
        results = ResultSet(
            items=body.get("docs", []),
            result_count=body.get("numFound", 0),
        )
        results.set_extra_data(SOLR_RESPONSE_KEY, data)
        return results


_cached_backend: Optional[SolrBackend] = None


def get_solr_backend() -> Optional[SolrBackend]:
    global _cached_backend
    if not settings.solr_enabled:
        return None
    if _cached_backend is None:
        _cached_backend = SolrBackend(
            select_url=settings.solr_select_url, timeout=settings.solr_timeout
        )
    return _cached_backend
