"""
Unit tests for the stats aggregator.

Covers:
    - empty input
    - view counting and unique visitors across event types
    - per-banner clicks, including unknown banner ids
    - device and referrer histograms after normalization
    - top-10 referrer truncation
    - deterministic ordering for ties and idempotent aggregation
"""

import random

from aerolinks_analytics.analytics.analytics import TOP_REFERRERS_LIMIT, summarize
from aerolinks_analytics.analytics.models import StatsSummary
from aerolinks_analytics.events.schemas import BannerClick, PageView


def _view(visitor="v1", **kw):
    return PageView(visitorId=visitor, **kw)


def _click(banner, visitor="v1", **kw):
    return BannerClick(bannerId=banner, visitorId=visitor, **kw)


def test_summarize_empty():
    summary = summarize([])
    assert summary == StatsSummary()
    assert summary.to_json_dict() == {
        "totalViews": 0,
        "uniqueVisitors": 0,
        "clicksByBanner": [],
        "devices": [],
        "topReferrers": [],
    }


def test_total_views_counts_only_page_views():
    events = [_view(), _view(), _click("ig"), _view("v2")]
    assert summarize(events).total_views == 3


def test_unique_visitors_spans_event_types():
    events = [_view("a"), _click("ig", "a"), _click("gh", "b"), _view("c"), _view("a")]
    assert summarize(events).unique_visitors == 3


def test_unique_visitors_matches_distinct_ids_random():
    rng = random.Random(7)
    visitors = [f"v{rng.randint(0, 40)}" for _ in range(300)]
    events = [
        _view(v) if rng.random() < 0.5 else _click(rng.choice(["ig", "yt"]), v)
        for v in visitors
    ]
    assert summarize(events).unique_visitors == len(set(visitors))


def test_clicks_by_banner_sorted_desc_and_unknown_ids_kept():
    events = [_click("ig"), _click("yt"), _click("yt"), _click("not-a-banner"), _click("yt"), _click("ig")]
    clicks = [(c.id, c.clicks) for c in summarize(events).clicks_by_banner]
    assert clicks == [("yt", 3), ("ig", 2), ("not-a-banner", 1)]


def test_clicks_tie_is_deterministic():
    events = [_click("a"), _click("b"), _click("b"), _click("a")]
    first = summarize(events).clicks_by_banner
    second = summarize(list(events)).clicks_by_banner
    assert first == second
    assert sorted((c.id, c.clicks) for c in first) == [("a", 2), ("b", 2)]
    # ties keep first-seen order
    assert [c.id for c in first] == ["a", "b"]


def test_devices_normalized_and_sorted():
    events = [
        _view(device="Mobile"),
        _view(device="mobile"),
        _view(device="smart-tv"),
        _view(),
        _click("ig", device="DESKTOP"),
        _view(device="mobile"),
    ]
    devices = [(d.device, d.count) for d in summarize(events).devices]
    assert devices == [("mobile", 3), ("unknown", 2), ("desktop", 1)]


def test_devices_only_include_buckets_that_appeared():
    devices = summarize([_view(device="tablet")]).devices
    assert [(d.device, d.count) for d in devices] == [("tablet", 1)]


def test_referrers_normalized_to_host_or_direct():
    events = [
        _view(referrer="https://t.co/abc"),
        _view(referrer="https://t.co/xyz?x=1"),
        _view(referrer="not a url"),
        _view(referrer=""),
        _view(),
    ]
    refs = [(r.referrer, r.count) for r in summarize(events).top_referrers]
    assert refs == [("(direct)", 3), ("t.co", 2)]


def test_top_referrers_truncated_to_ten_highest():
    events = []
    for i in range(15):
        events.extend(_view(referrer=f"https://site{i}.example/") for _ in range(i + 1))
    random.Random(3).shuffle(events)

    top = summarize(events).top_referrers
    assert len(top) == TOP_REFERRERS_LIMIT == 10
    assert [r.referrer for r in top] == [f"site{i}.example" for i in range(14, 4, -1)]
    assert [r.count for r in top] == list(range(15, 5, -1))


def test_scenario_view_then_click():
    events = [
        _view("v1", device="mobile"),
        _click("ig", "v1", referrer="https://t.co/abc"),
    ]
    summary = summarize(events)
    assert summary.total_views == 1
    assert summary.unique_visitors == 1
    assert [(c.id, c.clicks) for c in summary.clicks_by_banner] == [("ig", 1)]
    assert {(d.device, d.count) for d in summary.devices} == {("mobile", 1), ("unknown", 1)}
    assert {(r.referrer, r.count) for r in summary.top_referrers} == {("t.co", 1), ("(direct)", 1)}


def test_summarize_is_idempotent():
    events = [_view("a", device="mobile"), _click("ig", "b", referrer="https://x.com/")]
    assert summarize(events).to_json_dict() == summarize(events).to_json_dict()
