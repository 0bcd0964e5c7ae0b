"""Spellcheck "did you mean" area for search views.

The handler asks the backend for spellcheck data before the query runs, caches the raw
backend response next to the view's results once it has run, and renders a corrected
search link from that cached response. Rendering only ever reads the cache, so a later
request for the same query state gets the suggestion even when the results themselves
were served from cache.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from search_spellcheck.core.cache import PERMANENT, CacheBackend
from search_spellcheck.core.config import settings
from search_spellcheck.modules.search.query import SOLR_RESPONSE_KEY, SPELLCHECK_OPTION
from search_spellcheck.modules.spellcheck.suggestions import (
    apply_corrections,
    extract_corrections,
    first_suggestion,
    link_title,
    spellcheck_cache_key,
    suggestion_entries,
    suggestion_url,
)
from search_spellcheck.modules.views.area import AreaHandler
from search_spellcheck.modules.views.cache import NoneResultsCache, ResultsCachePlugin
from search_spellcheck.modules.views.filters import FulltextFilter
from search_spellcheck.modules.views.render import HtmlTag, Link, RenderElement

logger = logging.getLogger(__name__)

DEFAULT_FILTER_NAME = "query"

FilterState = Dict[str, Union[str, bool]]


class SpellcheckOptions(BaseModel):
    """Handler options: which exposed filter holds the search text, and when to show."""

    filter_name: str = DEFAULT_FILTER_NAME
    hide_on_result: bool = True


class SpellcheckArea(AreaHandler):
    plugin_id = "search_api_spellcheck"

    def __init__(self, view, options: Optional[Dict[str, Any]] = None):
        super().__init__(view, options)
        self.config = SpellcheckOptions.model_validate(self.options)
        self.cache_bin_name = settings.spellcheck_cache_bin
        self._cache: Optional[ResultsCachePlugin] = None
        self._filters: Optional[FilterState] = None
        self._current_query: Optional[Dict[str, Any]] = None

    def define_options(self) -> Dict[str, Any]:
        options = super().define_options()
        options["filter_name"] = DEFAULT_FILTER_NAME
        options["hide_on_result"] = True
        return options

    def build_options_form(self) -> Dict[str, Dict[str, Any]]:
        form = super().build_options_form()
        form["filter_name"] = {
            "type": "textfield",
            "title": "Enter parameter name of text search filter",
            "default_value": self.options.get("filter_name") or DEFAULT_FILTER_NAME,
        }
        form["hide_on_result"] = {
            "type": "checkbox",
            "title": "Hide when the view has results.",
            "default_value": self.options.get("hide_on_result", True),
        }
        return form

    @property
    def filter_name(self) -> str:
        return self.config.filter_name or DEFAULT_FILTER_NAME

    # ----- cache -----

    def get_cache(self) -> ResultsCachePlugin:
        """The results-cache plugin whose key and tags the spellcheck entry follows."""
        if self._cache is None:
            if self.live_preview:
                self._cache = NoneResultsCache(self.view)
            else:
                self._cache = self.view.get_cache_plugin()
        return self._cache

    def get_cache_key(self) -> str:
        return spellcheck_cache_key(self.get_cache().generate_results_key())

    def cache_bin(self) -> CacheBackend:
        return self.get_cache().cache_bin(self.cache_bin_name)

    def get_cached_response(self) -> Optional[dict]:
        item = self.cache_bin().get(self.get_cache_key())
        if item is None or not item.data:
            return None
        return item.data

    # ----- lifecycle -----

    def pre_query(self) -> None:
        self.query.set_option(SPELLCHECK_OPTION, True)

    def post_execute(self, values: List[dict]) -> None:
        """Save the backend response under the spellcheck key, tagged like the view's results."""
        results = self.query.get_results() if self.query is not None else None
        response = results.get_extra_data(SOLR_RESPONSE_KEY) if results is not None else None
        if not response:
            logger.debug(f"No backend response to cache for view {self.view.id}")
            return
        cache = self.get_cache()
        self.cache_bin().set(
            self.get_cache_key(), response, PERMANENT, cache.get_cache_tags()
        )

    def should_render(self, empty: bool) -> bool:
        return not self.config.hide_on_result or empty

    def render(self, empty: bool = False) -> List[RenderElement]:
        if not self.should_render(empty):
            return []
        response = self.get_cached_response()
        if response is None:
            return []

        keys = self.view.get_exposed_input().get(self.filter_name)
        keys = "" if keys is None else str(keys)
        corrections = extract_corrections(response)
        if not corrections or not keys:
            return []

        corrected = apply_corrections(keys, corrections)
        # The old search text and page no longer apply to the corrected search.
        dropped = {"keys", "page", self.filter_name}
        carried = {k: v for k, v in self.get_current_query().items() if k not in dropped}
        return [
            HtmlTag(tag="span", value="Did you mean: "),
            Link(
                title=link_title(corrected),
                url=suggestion_url(self.view.current_path, corrected, carried),
            ),
            HtmlTag(tag="span", value="?"),
        ]

    # ----- filter helpers -----

    def get_current_query(self) -> Dict[str, Any]:
        """The current request's query parameters."""
        if self._current_query is None:
            self._current_query = dict(self.view.request_query)
        return self._current_query

    def get_filters(self) -> FilterState:
        """Lowercased submitted value (or False) per fulltext filter identifier."""
        if self._filters is None:
            self._filters = {}
            exposed_input = self.view.get_exposed_input()
            for handler in self.view.filters.values():
                if not isinstance(handler, FulltextFilter):
                    continue
                value = handler.value(exposed_input)
                self._filters[handler.identifier] = str(value).lower() if value else False
        return self._filters

    def get_filter_match(self, suggestion: Tuple[str, Any]) -> Optional[Dict[str, str]]:
        """`{identifier: first suggestion}` for the filter whose words contain the token."""
        token, info = suggestion
        replacement = first_suggestion(info)
        if replacement is None:
            return None
        for identifier, value in self.get_filters().items():
            if value and token.lower() in value.split():
                return {identifier: replacement}
        return None

    def suggestion_map(self) -> Dict[str, str]:
        """Corrected value per fulltext filter, for filters the cached response has fixes for."""
        response = self.get_cached_response()
        if response is None:
            return {}
        entries = suggestion_entries(response)
        fixes: Dict[str, List[Tuple[str, str]]] = {}
        for position, entry in enumerate(entries):
            if not isinstance(entry, str) or position + 1 >= len(entries):
                continue
            match = self.get_filter_match((entry, entries[position + 1]))
            if not match:
                continue
            for identifier, replacement in match.items():
                fixes.setdefault(identifier, []).append((entry.lower(), replacement))
        filters = self.get_filters()
        return {
            identifier: apply_corrections(filters[identifier], pairs)
            for identifier, pairs in fixes.items()
        }
