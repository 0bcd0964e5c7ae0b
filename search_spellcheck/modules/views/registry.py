"""Registry of view factories; each request gets a fresh View instance."""

from __future__ import annotations

from typing import Callable, Dict, List

from search_spellcheck.core.exceptions import ViewNotFoundException
from search_spellcheck.modules.views.view import View

ViewFactory = Callable[[], View]


class ViewRegistry:
    def __init__(self):
        self._factories: Dict[str, ViewFactory] = {}

    def register(self, view_id: str, factory: ViewFactory) -> None:
        self._factories[view_id] = factory

    def create(self, view_id: str) -> View:
        try:
            factory = self._factories[view_id]
        except KeyError:
            raise ViewNotFoundException(view_id) from None
        return factory()

    def ids(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, view_id: str) -> bool:
        return view_id in self._factories


__all__ = ["ViewFactory", "ViewRegistry"]
