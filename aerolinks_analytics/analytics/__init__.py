from .analytics import TOP_REFERRERS_LIMIT, Analytics, summarize
from .base import BaseAnalytics
from .models import BannerClicks, DeviceCount, ReferrerCount, StatsSummary

__all__ = [
    "Analytics",
    "BaseAnalytics",
    "summarize",
    "TOP_REFERRERS_LIMIT",
    "BannerClicks",
    "DeviceCount",
    "ReferrerCount",
    "StatsSummary",
]
