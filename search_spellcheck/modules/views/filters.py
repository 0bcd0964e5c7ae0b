"""Exposed filters that translate submitted input into query keys and conditions."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from search_spellcheck.modules.search.query import SearchQuery


class FilterHandler:
    """Base class for view filters; `id` is the filter's key on the view."""

    def __init__(self, filter_id: str, *, expose_identifier: Optional[str] = None):
        self.id = filter_id
        self.expose_identifier = expose_identifier

    @property
    def identifier(self) -> str:
        """The query-string name this filter reads, falling back to its id."""
        return self.expose_identifier or self.id

    def value(self, exposed_input: Mapping[str, Any]) -> Any:
        return exposed_input.get(self.identifier)

    def apply(self, query: SearchQuery, exposed_input: Mapping[str, Any]) -> None:
        raise NotImplementedError


class FulltextFilter(FilterHandler):
    """Feeds the submitted text into the query's fulltext keys."""

    def apply(self, query: SearchQuery, exposed_input: Mapping[str, Any]) -> None:
        value = self.value(exposed_input)
        if not value:
            return
        query.keys = f"{query.keys} {value}".strip() if query.keys else str(value)


class FieldFilter(FilterHandler):
    """Adds an equality condition on `field` when a value was submitted."""

    def __init__(self, filter_id: str, field: str, *, expose_identifier: Optional[str] = None):
        super().__init__(filter_id, expose_identifier=expose_identifier)
        self.field = field

    def apply(self, query: SearchQuery, exposed_input: Mapping[str, Any]) -> None:
        value = self.value(exposed_input)
        if value not in (None, ""):
            query.add_condition(self.field, value)
