"""Results-cache plugins: how a view names and tags its cached results.

`generate_results_key()` is a digest over everything that shapes the result set (view,
display, exposed input, arguments, paging, index), so equal query states share a key and
different states never collide.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Dict, List, Type

from search_spellcheck.core.cache import CacheBackend, NullBackend, get_cache_bin

if TYPE_CHECKING:  # pragma: no cover
    from search_spellcheck.modules.views.view import View


class ResultsCachePlugin:
    plugin_id = "base"

    def __init__(self, view: "View"):
        self.view = view

    def _key_data(self) -> dict:
        view = self.view
        return {
            "index": view.index_id,
            "exposed_input": {k: str(v) for k, v in sorted(view.get_exposed_input().items())},
            "arguments": [str(arg) for arg in view.args],
            "items_per_page": view.items_per_page,
            "offset": view.offset,
        }

    def generate_results_key(self) -> str:
        key_data = json.dumps(self._key_data(), sort_keys=True, default=str)
        digest = hashlib.sha256(key_data.encode("utf-8")).hexdigest()
        return f"views_data:{self.view.id}:{self.view.display_id}:results:{digest}"

    def get_cache_tags(self) -> List[str]:
        return [f"config:views.view.{self.view.id}", f"search_api_list:{self.view.index_id}"]

    def cache_bin(self, name: str) -> CacheBackend:
        raise NotImplementedError


class TagResultsCache(ResultsCachePlugin):
    """Caches in the shared bins; entries live until one of their tags is invalidated."""

    plugin_id = "tag"

    def cache_bin(self, name: str) -> CacheBackend:
        return get_cache_bin(name)


class NoneResultsCache(ResultsCachePlugin):
    """Caches nothing; used for live preview."""

    plugin_id = "none"

    def cache_bin(self, name: str) -> CacheBackend:
        return NullBackend(name)


CACHE_PLUGINS: Dict[str, Type[ResultsCachePlugin]] = {
    TagResultsCache.plugin_id: TagResultsCache,
    NoneResultsCache.plugin_id: NoneResultsCache,
}


def create_cache_plugin(plugin_id: str, view: "View") -> ResultsCachePlugin:
    try:
        plugin_cls = CACHE_PLUGINS[plugin_id]
    except KeyError:
        raise ValueError(f"Unknown results cache plugin: {plugin_id}") from None
    return plugin_cls(view)
