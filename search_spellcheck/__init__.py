"""Search views with cached "did you mean" spellcheck suggestions."""

from search_spellcheck.core.config import Settings, settings

__all__ = ["Settings", "settings"]
