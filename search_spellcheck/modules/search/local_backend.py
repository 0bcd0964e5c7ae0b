"""In-process search backend over a list of documents.

Used when Solr is disabled (local development and tests). When the spellcheck option is
set it answers with a Solr-shaped response so downstream consumers cannot tell the two
backends apart: `spellcheck.suggestions` is a flat list of misspelled tokens, each followed
by `{"numFound", "startOffset", "endOffset", "suggestion": [...]}`.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from spellchecker import SpellChecker

from search_spellcheck.modules.search.query import (
    SOLR_RESPONSE_KEY,
    SPELLCHECK_OPTION,
    ResultSet,
    SearchQuery,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


class LocalSearchBackend:
    """Substring search over in-memory documents with a vocabulary-backed spellchecker."""

    def __init__(
        self,
        documents: Optional[Iterable[dict]] = None,
        *,
        fields: Iterable[str] = ("title", "body"),
        suggestion_count: int = 5,
    ):
        self.fields = tuple(fields)
        self.suggestion_count = suggestion_count
        self.documents: List[dict] = []
        self.spell = SpellChecker(language=None, distance=2)
        self.index_documents(documents or [])

    def index_documents(self, documents: Iterable[dict]) -> None:
        """Add documents and feed their words into the spellcheck vocabulary."""
        words = []
        for document in documents:
            self.documents.append(document)
            words.extend(_TOKEN_RE.findall(self._text(document)))
        if words:
            self.spell.word_frequency.load_words(words)

    def _text(self, document: dict) -> str:
        return " ".join(str(document.get(field) or "") for field in self.fields).lower()

    def _matches(self, document: dict, query: SearchQuery, tokens: List[str]) -> bool:
        for field, value in query.conditions:
            if document.get(field) != value:
                return False
        text = self._text(document)
        return all(token in text for token in tokens)

    def spellcheck(self, keys: str) -> dict:
        """Build a Solr-style spellcheck section for `keys`."""
        suggestions: list = []
        for match in _TOKEN_RE.finditer(keys):
            token = match.group(0)
            if not self.spell.unknown([token]):
                continue
            candidates = self.spell.candidates(token) or set()
            ranked = sorted(
                (c for c in candidates if c != token.lower() and c in self.spell),
                key=lambda c: (-self.spell[c], c),
            )[: self.suggestion_count]
            suggestions.append(token)
            suggestions.append(
                {
                    "numFound": len(ranked),
                    "startOffset": match.start(),
                    "endOffset": match.end(),
                    "suggestion": ranked,
                }
            )
        return {"suggestions": suggestions}

    def search(self, query: SearchQuery) -> ResultSet:
        tokens = [token.lower() for token in _TOKEN_RE.findall(query.keys)]
        matched = [doc for doc in self.documents if self._matches(doc, query, tokens)]
        page = matched[query.offset : query.offset + query.limit]

        response = {
            "responseHeader": {"status": 0, "params": {"q": query.keys}},
            "response": {"numFound": len(matched), "start": query.offset, "docs": page},
        }
        if query.get_option(SPELLCHECK_OPTION) and query.keys.strip():
            response["spellcheck"] = self.spellcheck(query.keys)

        logger.debug(
            f"Local search on {query.index_id} for '{query.keys}' matched {len(matched)} document(s)"
        )
        results = ResultSet(items=page, result_count=len(matched))
        results.set_extra_data(SOLR_RESPONSE_KEY, response)
        return results
