"""Search query and result set objects passed between views and search backends."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

# Query option asking the backend to compute spellcheck suggestions.
SPELLCHECK_OPTION = "search_api_spellcheck"
# Extra-data slot holding the backend's raw response (spellcheck payload included).
SOLR_RESPONSE_KEY = "search_api_solr_response"


class ResultSet:
    """Items returned by a backend plus backend-specific extra data."""

    def __init__(
        self,
        items: Optional[List[dict]] = None,
        result_count: Optional[int] = None,
        extra_data: Optional[Dict[str, Any]] = None,
    ):
        self.items = list(items or [])
        self.result_count = len(self.items) if result_count is None else result_count
        self._extra_data: Dict[str, Any] = dict(extra_data or {})

    def get_extra_data(self, name: str, default: Any = None) -> Any:
        return self._extra_data.get(name, default)

    def set_extra_data(self, name: str, data: Any) -> None:
        self._extra_data[name] = data

    def get_all_extra_data(self) -> Dict[str, Any]:
        return dict(self._extra_data)

    def __len__(self) -> int:
        return len(self.items)


class SearchQuery:
    """
    A full-text query against one index.

    Holds the fulltext keys, field conditions and free-form options; the results of
    execution are attached to the query so post-execute hooks can read them back.
    """

    def __init__(self, index_id: str, keys: str = "", limit: int = 10, offset: int = 0):
        self.index_id = index_id
        self.keys = keys
        self.limit = limit
        self.offset = offset
        self.conditions: List[Tuple[str, Any]] = []
        self._options: Dict[str, Any] = {}
        self._results: Optional[ResultSet] = None

    def set_option(self, name: str, value: Any) -> Any:
        """Set an option and return its previous value."""
        previous = self._options.get(name)
        self._options[name] = value
        return previous

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def get_options(self) -> Dict[str, Any]:
        return dict(self._options)

    def add_condition(self, field: str, value: Any) -> "SearchQuery":
        self.conditions.append((field, value))
        return self

    def set_results(self, results: ResultSet) -> None:
        self._results = results

    def get_results(self) -> Optional[ResultSet]:
        return self._results


__all__ = ["SOLR_RESPONSE_KEY", "SPELLCHECK_OPTION", "ResultSet", "SearchQuery"]
