"""Spellcheck suggestions for search views."""

from .area import DEFAULT_FILTER_NAME, SpellcheckArea, SpellcheckOptions
from .suggestions import (
    SPELLCHECK_CACHE_SUFFIX,
    apply_corrections,
    extract_corrections,
    spellcheck_cache_key,
    suggestion_url,
)

__all__ = [
    "DEFAULT_FILTER_NAME",
    "SPELLCHECK_CACHE_SUFFIX",
    "SpellcheckArea",
    "SpellcheckOptions",
    "apply_corrections",
    "extract_corrections",
    "spellcheck_cache_key",
    "suggestion_url",
]
