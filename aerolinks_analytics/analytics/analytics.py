"""
Analytics module for Aerolinks Analytics.

Responsibilities:
    - Record validated events through the event log
    - Summarize the full log into the dashboard payload:
        * total page views
        * unique visitors (distinct visitorId over all events)
        * clicks per banner
        * device histogram (normalized)
        * top 10 referrers (normalized to host)

Design:
    - `summarize` is a pure, single-pass reduction over a sequence of events.
    - `Analytics.summary()` rescans the whole log on every call. There is no
      cache and no incremental state, so a summary always reflects the latest
      appended event.
    - Ties in every histogram keep first-seen order (dicts preserve insertion
      order and `sorted` is stable), so identical logs give identical output.

LLM Prompt Example:
    "Explain how to extend this summary with daily/weekly windows while keeping
    the recompute-from-scratch semantics."
"""

from typing import Dict, Iterable, List, Set

from ..events.normalize import normalize_device, normalize_referrer
from ..events.schemas import BannerClick, Event, PageView, StoredEvent
from ..storage.base import BaseStorage
from .base import BaseAnalytics
from .models import BannerClicks, DeviceCount, ReferrerCount, StatsSummary

TOP_REFERRERS_LIMIT = 10


def _ranked(counts: Dict[str, int]) -> List[tuple]:
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def summarize(events: Iterable[StoredEvent]) -> StatsSummary:
    """
    Reduce a sequence of events into a StatsSummary.

    Args:
        events (Iterable[StoredEvent]): Events in log order.

    Returns:
        StatsSummary: Derived statistics; an empty input gives all zeros and
        empty lists.

    Example:
        {
            "totalViews": 1,
            "uniqueVisitors": 1,
            "clicksByBanner": [{"id": "ig", "clicks": 1}],
            "devices": [{"device": "mobile", "count": 1}, {"device": "unknown", "count": 1}],
            "topReferrers": [{"referrer": "(direct)", "count": 1}, {"referrer": "t.co", "count": 1}]
        }
    """
    total_views = 0
    visitors: Set[str] = set()
    clicks: Dict[str, int] = {}
    devices: Dict[str, int] = {}
    referrers: Dict[str, int] = {}

    for event in events:
        visitors.add(event.visitor_id)

        device = normalize_device(event.device)
        devices[device] = devices.get(device, 0) + 1

        referrer = normalize_referrer(event.referrer)
        referrers[referrer] = referrers.get(referrer, 0) + 1

        if isinstance(event, PageView):
            total_views += 1
        elif isinstance(event, BannerClick):
            clicks[event.banner_id] = clicks.get(event.banner_id, 0) + 1

    return StatsSummary(
        total_views=total_views,
        unique_visitors=len(visitors),
        clicks_by_banner=[BannerClicks(id=k, clicks=v) for k, v in _ranked(clicks)],
        devices=[DeviceCount(device=k, count=v) for k, v in _ranked(devices)],
        top_referrers=[
            ReferrerCount(referrer=k, count=v)
            for k, v in _ranked(referrers)[:TOP_REFERRERS_LIMIT]
        ],
    )


class Analytics(BaseAnalytics):
    def __init__(self, storage: BaseStorage):
        """
        Args:
            storage (BaseStorage): Event log to append to and rescan.
        """
        self.storage = storage

    def record(self, event: Event) -> StoredEvent:
        """Append one validated event to the log. Storage errors propagate."""
        return self.storage.append_event(event)

    def summary(self) -> StatsSummary:
        """
        Rescan the full log and aggregate it.

        Notes:
            - O(n) in the number of stored events, on every call.
            - Corrupt records were already dropped by the storage layer.
        """
        return summarize(self.storage.read_events())
