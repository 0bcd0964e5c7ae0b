"""Shared test doubles for search backends and spellcheck payloads."""

from search_spellcheck.modules.search.query import SOLR_RESPONSE_KEY, ResultSet


def solr_response(*suggestions, num_found=0):
    """Solr-shaped response body carrying the given flat spellcheck suggestions."""
    return {
        "responseHeader": {"status": 0},
        "response": {"numFound": num_found, "start": 0, "docs": []},
        "spellcheck": {"suggestions": list(suggestions)},
    }


SPELING = solr_response(
    "speling",
    {"numFound": 1, "startOffset": 0, "endOffset": 7, "suggestion": ["spelling"]},
)


class StubBackend:
    """Backend double returning canned items and response, recording queries it saw."""

    def __init__(self, response=None, items=None):
        self.response = response
        self.items = items or []
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        results = ResultSet(items=self.items)
        if self.response is not None:
            results.set_extra_data(SOLR_RESPONSE_KEY, self.response)
        return results


class DummyRedis:
    """Minimal synchronous Redis double covering the commands the cache uses."""

    def __init__(self):
        self.store = {}
        self.sets = {}
        self.expiries = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise ConnectionError("redis down")

    def get(self, key):
        self._check()
        value = self.store.get(key)
        return value.encode("utf-8") if isinstance(value, str) else value

    def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        self.expiries[key] = ex

    def sadd(self, key, *members):
        self._check()
        self.sets.setdefault(key, set()).update(members)

    def srem(self, key, *members):
        self._check()
        remaining = self.sets.get(key, set())
        remaining.difference_update(members)
        if not remaining:
            self.sets.pop(key, None)

    def smembers(self, key):
        self._check()
        return {m.encode("utf-8") for m in self.sets.get(key, set())}

    def delete(self, *keys):
        self._check()
        for key in keys:
            if isinstance(key, bytes):
                key = key.decode("utf-8")
            self.store.pop(key, None)
            self.sets.pop(key, None)
