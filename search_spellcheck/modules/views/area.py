"""Base class for area handlers (header/footer/empty regions of a view)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from search_spellcheck.modules.views.render import RenderElement

if TYPE_CHECKING:  # pragma: no cover
    from search_spellcheck.modules.search.query import SearchQuery
    from search_spellcheck.modules.views.view import View


class AreaHandler:
    """
    An area plugin attached to a view.

    The view calls `pre_query()` before its query runs, `post_execute()` once the
    results are in, and `render()` when the region is drawn. A handler instance lives
    for a single view execution.
    """

    plugin_id = "area"

    def __init__(self, view: "View", options: Optional[Dict[str, Any]] = None):
        self.view = view
        self.options = self.define_options()
        self.options.update(options or {})

    def define_options(self) -> Dict[str, Any]:
        return {}

    def build_options_form(self) -> Dict[str, Dict[str, Any]]:
        return {}

    @property
    def query(self) -> "SearchQuery":
        return self.view.query

    @property
    def live_preview(self) -> bool:
        return self.view.live_preview

    def pre_query(self) -> None:
        pass

    def post_execute(self, values: List[dict]) -> None:
        pass

    def render(self, empty: bool = False) -> List[RenderElement]:
        return []
