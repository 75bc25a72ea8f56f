"""
Utility functions for videoscripter.
"""

from __future__ import annotations

from videoscripter.utils.duration import parse_iso8601_duration

__all__ = ["parse_iso8601_duration"]
