"""Search view: exposed input in, results and rendered areas out.

Execution order per request:
1. build the query from the exposed filters;
2. every area handler's `pre_query()`;
3. backend search, results attached to the query;
4. every area handler's `post_execute(values)`;
5. `render_areas()` draws header/footer handlers, and empty-region handlers only for an
   empty result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from search_spellcheck.core.logging_config import bind_request_context, reset_request_context
from search_spellcheck.modules.search.query import SearchQuery
from search_spellcheck.modules.views.area import AreaHandler
from search_spellcheck.modules.views.cache import ResultsCachePlugin, create_cache_plugin
from search_spellcheck.modules.views.filters import FilterHandler
from search_spellcheck.modules.views.render import RenderElement

logger = logging.getLogger(__name__)

REGIONS = ("header", "footer", "empty")


@dataclass(frozen=True)
class AreaConfig:
    region: str
    handler: Type[AreaHandler]
    options: Dict[str, Any] = field(default_factory=dict)


class View:
    def __init__(
        self,
        view_id: str,
        backend,
        *,
        index_id: str = "default",
        display_id: str = "default",
        filters: Iterable[FilterHandler] = (),
        areas: Iterable[AreaConfig] = (),
        cache_plugin: str = "tag",
        items_per_page: int = 10,
    ):
        self.id = view_id
        self.backend = backend
        self.index_id = index_id
        self.display_id = display_id
        self.filters: Dict[str, FilterHandler] = {f.id: f for f in filters}
        self.areas: List[AreaConfig] = list(areas)
        for config in self.areas:
            if config.region not in REGIONS:
                raise ValueError(f"Unknown area region: {config.region}")
        self.cache_plugin_id = cache_plugin
        self.items_per_page = items_per_page
        self.offset = 0
        self.args: List[Any] = []
        self.live_preview = False
        self.current_path = "/"
        self.request_query: Dict[str, Any] = {}

        self.query: Optional[SearchQuery] = None
        self.result: List[dict] = []
        self.total_rows = 0
        self.executed = False
        self._exposed_input: Dict[str, Any] = {}
        self._cache_plugin: Optional[ResultsCachePlugin] = None
        self._handlers: List[Tuple[AreaConfig, AreaHandler]] = []

    # ----- request state -----

    def set_exposed_input(self, exposed_input: Mapping[str, Any]) -> None:
        self._exposed_input = dict(exposed_input)

    def get_exposed_input(self) -> Dict[str, Any]:
        return self._exposed_input

    def set_arguments(self, args: Iterable[Any]) -> None:
        self.args = list(args)

    def set_request(self, path: str, query_params: Mapping[str, Any]) -> None:
        self.current_path = path or "/"
        self.request_query = dict(query_params)

    def set_offset(self, offset: int) -> None:
        self.offset = max(int(offset), 0)

    def get_cache_plugin(self) -> ResultsCachePlugin:
        """The display's configured results-cache plugin."""
        if self._cache_plugin is None:
            self._cache_plugin = create_cache_plugin(self.cache_plugin_id, self)
        return self._cache_plugin

    @property
    def empty(self) -> bool:
        return not self.result

    # ----- execution -----

    def build(self) -> SearchQuery:
        query = SearchQuery(self.index_id, limit=self.items_per_page, offset=self.offset)
        for handler in self.filters.values():
            handler.apply(query, self._exposed_input)
        self.query = query
        return query

    def _init_handlers(self) -> None:
        self._handlers = [(config, config.handler(self, config.options)) for config in self.areas]

    def execute(self) -> None:
        if self.executed:
            return
        tokens = bind_request_context(view_id=self.id)
        try:
            self.build()
            self._init_handlers()
            for _, handler in self._handlers:
                handler.pre_query()

            results = self.backend.search(self.query)
            self.query.set_results(results)
            values = list(results.items)

            for _, handler in self._handlers:
                handler.post_execute(values)

            self.result = values
            self.total_rows = results.result_count
            self.executed = True
            logger.info(
                f"View {self.id}:{self.display_id} returned {self.total_rows} result(s)"
            )
        finally:
            reset_request_context(tokens)

    def handlers(self, region: Optional[str] = None) -> List[AreaHandler]:
        return [h for config, h in self._handlers if region is None or config.region == region]

    def render_areas(self) -> List[Tuple[AreaConfig, AreaHandler, List[RenderElement]]]:
        """Render every area handler; the `empty` region only renders for empty results."""
        self.execute()
        rendered = []
        for config, handler in self._handlers:
            if config.region == "empty" and not self.empty:
                continue
            rendered.append((config, handler, handler.render(empty=self.empty)))
        return rendered
