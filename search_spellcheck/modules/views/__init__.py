"""Views package: a search view with exposed filters, results cache plugins and areas."""

from .area import AreaHandler
from .cache import NoneResultsCache, ResultsCachePlugin, TagResultsCache, create_cache_plugin
from .filters import FieldFilter, FilterHandler, FulltextFilter
from .registry import ViewRegistry
from .render import HtmlTag, Link, RenderElement, render_html
from .view import AreaConfig, View

__all__ = [
    "AreaConfig",
    "AreaHandler",
    "FieldFilter",
    "FilterHandler",
    "FulltextFilter",
    "HtmlTag",
    "Link",
    "NoneResultsCache",
    "RenderElement",
    "ResultsCachePlugin",
    "TagResultsCache",
    "View",
    "ViewRegistry",
    "create_cache_plugin",
    "render_html",
]
