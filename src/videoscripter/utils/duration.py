"""
ISO 8601 duration parsing for YouTube ``contentDetails.duration`` values.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_DURATION_PATTERN = re.compile(
    r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?"
)


def parse_iso8601_duration(duration_str: Optional[str]) -> int:
    """
    Parse ISO 8601 duration string to whole seconds.

    YouTube API returns duration in ISO 8601 format like:
    - PT1H30M15S (1 hour, 30 minutes, 15 seconds)
    - PT5M3S (5 minutes, 3 seconds)
    - PT45S (45 seconds)
    - P1DT2H (1 day, 2 hours)

    Parameters
    ----------
    duration_str : Optional[str]
        ISO 8601 duration string (e.g., "PT1H30M15S")

    Returns
    -------
    int
        Duration in seconds; 0 for empty or malformed input

    Examples
    --------
    >>> parse_iso8601_duration("PT1H30M15S")
    5415
    >>> parse_iso8601_duration("PT5M3S")
    303
    >>> parse_iso8601_duration("not a duration")
    0
    """
    if not duration_str:
        return 0

    match = _DURATION_PATTERN.fullmatch(duration_str.strip())
    if not match:
        logger.warning(f"Could not parse duration: {duration_str}")
        return 0

    days = int(match.group(1) or 0)
    hours = int(match.group(2) or 0)
    minutes = int(match.group(3) or 0)
    seconds = int(match.group(4) or 0)

    return days * 86400 + hours * 3600 + minutes * 60 + seconds
