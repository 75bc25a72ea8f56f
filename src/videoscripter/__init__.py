"""
videoscripter - Collect YouTube videos into projects and derive scripts.

Videos are ingested from the YouTube Data API into user-owned projects,
deduplicated against the channels and videos already stored, and kept
under soft-delete semantics.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "videoscripter"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
