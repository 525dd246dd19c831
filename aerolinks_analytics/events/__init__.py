"""
Event models, ingestion validation and read-time normalization.
"""

from .normalize import DIRECT, KNOWN_DEVICES, UNKNOWN_DEVICE, normalize_device, normalize_referrer
from .schemas import (
    BannerClick,
    Event,
    InvalidEventError,
    PageView,
    StoredBannerClick,
    StoredEvent,
    StoredPageView,
    parse_event,
    parse_stored_event,
    stamp,
)

__all__ = [
    "BannerClick",
    "Event",
    "InvalidEventError",
    "PageView",
    "StoredBannerClick",
    "StoredEvent",
    "StoredPageView",
    "parse_event",
    "parse_stored_event",
    "stamp",
    "DIRECT",
    "KNOWN_DEVICES",
    "UNKNOWN_DEVICE",
    "normalize_device",
    "normalize_referrer",
]
