"""Spellcheck payload helpers: cache key derivation, correction extraction and substitution.

The backend payload lists misspellings as a flat sequence: a token string followed by a
mapping whose `suggestion` list holds the candidates, most relevant first. Candidates are
plain strings, or `{"word": ..., "freq": ...}` mappings when extended results are enabled.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

logger = logging.getLogger(__name__)

SPELLCHECK_CACHE_SUFFIX = ":spellcheck"

Correction = Tuple[str, str]


def spellcheck_cache_key(results_key: str) -> str:
    """Key the spellcheck payload is cached under, derived from the view's results key."""
    return f"{results_key}{SPELLCHECK_CACHE_SUFFIX}"


def suggestion_entries(payload: Any) -> List[Any]:
    """The flat `spellcheck.suggestions` list of a backend response, or `[]`."""
    if not isinstance(payload, dict):
        return []
    spellcheck = payload.get("spellcheck")
    if not isinstance(spellcheck, dict):
        return []
    entries = spellcheck.get("suggestions")
    return list(entries) if isinstance(entries, (list, tuple)) else []


def first_suggestion(info: Any) -> Optional[str]:
    """First candidate word of a suggestion mapping, or None when there is none."""
    if not isinstance(info, dict):
        return None
    candidates = info.get("suggestion")
    if not isinstance(candidates, (list, tuple)) or not candidates:
        return None
    candidate = candidates[0]
    if isinstance(candidate, dict):
        candidate = candidate.get("word")
    if not isinstance(candidate, str) or not candidate:
        return None
    return candidate


def extract_corrections(payload: Any) -> List[Correction]:
    """
    Collect `(misspelling, first suggestion)` pairs in payload order.

    A token whose next entry is missing, is not a suggestion mapping, or carries no
    candidates is skipped.
    """
    entries = suggestion_entries(payload)
    corrections: List[Correction] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, str):
            continue
        info = entries[position + 1] if position + 1 < len(entries) else None
        suggestion = first_suggestion(info)
        if suggestion is None:
            logger.debug(f"Skipping spellcheck token without suggestions: {entry!r}")
            continue
        corrections.append((entry, suggestion))
    return corrections


def apply_corrections(text: str, corrections: Sequence[Correction]) -> str:
    """Replace every occurrence of each misspelling, in order; later pairs see earlier output."""
    for error, suggestion in corrections:
        text = text.replace(error, suggestion)
    return text


def link_title(corrected: str) -> str:
    return corrected.replace("+", " ")


def keys_parameter(corrected: str) -> str:
    """Value of the `keys` query parameter: spaces become `+`, other reserved chars are escaped."""
    return quote(corrected.replace(" ", "+"), safe="+")


def suggestion_url(
    path: str, corrected: str, extra_params: Optional[Mapping[str, Any]] = None
) -> str:
    """Link target: `path?keys=...`, followed by any other parameters to carry over."""
    url = f"{path}?keys={keys_parameter(corrected)}"
    if extra_params:
        url = f"{url}&{urlencode(list(extra_params.items()), doseq=True)}"
    return url


__all__ = [
    "Correction",
    "SPELLCHECK_CACHE_SUFFIX",
    "apply_corrections",
    "extract_corrections",
    "first_suggestion",
    "keys_parameter",
    "link_title",
    "spellcheck_cache_key",
    "suggestion_entries",
    "suggestion_url",
]
