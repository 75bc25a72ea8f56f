"""
ID Factory for generating valid YouTube IDs.
"""

import hashlib
import random
import string
from typing import Optional


class YouTubeIdFactory:
    """Factory for generating valid YouTube IDs."""

    @staticmethod
    def create_channel_id(seed: Optional[str] = None) -> str:
        """
        Create a 24-character YouTube channel ID starting with 'UC'.

        Parameters
        ----------
        seed : Optional[str]
            Optional seed for deterministic ID generation
        """
        if seed:
            hash_value = hashlib.md5(seed.encode()).hexdigest()[:22]
        else:
            hash_value = "".join(
                random.choices(string.ascii_letters + string.digits, k=22)
            )
        return f"UC{hash_value}"

    @staticmethod
    def create_video_id(seed: Optional[str] = None) -> str:
        """
        Create an 11-character YouTube video ID.

        Parameters
        ----------
        seed : Optional[str]
            Optional seed for deterministic ID generation
        """
        if seed:
            return hashlib.md5(seed.encode()).hexdigest()[:11]
        chars = string.ascii_letters + string.digits + "-_"
        return "".join(random.choices(chars, k=11))
