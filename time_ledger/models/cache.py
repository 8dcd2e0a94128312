"""
Cache entry data model for the per-document configuration cache.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class ConfigCacheEntry:
    """
    Cached configuration snapshot of one document.

    Attributes:
        config: Setting name to value mapping
        cached_at: Clock reading when the snapshot was stored
        ttl_seconds: Time-to-live in seconds
    """

    config: Dict[str, str]
    cached_at: float
    ttl_seconds: float = 300

    def __post_init__(self):
        """Validate field constraints."""
        if self.ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {self.ttl_seconds}")

    def is_expired(self, now: float) -> bool:
        """
        Check if entry has expired.

        Args:
            now: Current clock reading, same clock as cached_at

        Returns:
            True once ttl_seconds or more have elapsed since cached_at
        """
        return (now - self.cached_at) >= self.ttl_seconds
