"""Core configuration package.

Exposes cached `settings` so imports are cheap and deterministic.
"""

from .environment import ENVIRONMENTS, get_settings
from .settings import Settings

settings = get_settings()

__all__ = ["ENVIRONMENTS", "Settings", "settings", "get_settings"]
