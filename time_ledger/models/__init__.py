"""
Data models for the time ledger.
"""

from .cache import ConfigCacheEntry
from .segment_layout import (
    SEGMENT_LAYOUT,
    SegmentLayout,
    Column,
    CLOSED_SENTINEL,
    CONFIG_SEGMENT_NAME,
    CONFIG_RANGE,
    HOURLY_RATE_KEY,
    TIMEZONE_KEY,
    build_config_requests,
    default_config_snapshot,
    is_period_segment_name,
)
from .timer_results import StartResult, StopResult

__all__ = [
    'ConfigCacheEntry',
    'SEGMENT_LAYOUT',
    'SegmentLayout',
    'Column',
    'CLOSED_SENTINEL',
    'CONFIG_SEGMENT_NAME',
    'CONFIG_RANGE',
    'HOURLY_RATE_KEY',
    'TIMEZONE_KEY',
    'build_config_requests',
    'default_config_snapshot',
    'is_period_segment_name',
    'StartResult',
    'StopResult',
]
