"""
Unit tests for the tracking client, using httpx.MockTransport.
"""

import json

import httpx
import pytest

from aerolinks_analytics.client import AnalyticsClient, StatsUnavailableError, new_visitor_id


def _recording_transport(status=200, body=None):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body if body is not None else {"ok": True})

    return httpx.MockTransport(handler), seen


def test_new_visitor_id_is_unique():
    assert new_visitor_id() != new_visitor_id()


def test_client_generates_visitor_id_when_missing():
    transport, _ = _recording_transport()
    with AnalyticsClient("http://test", transport=transport) as client:
        assert client.visitor_id


def test_track_page_view_posts_event():
    transport, seen = _recording_transport()
    with AnalyticsClient("http://test", visitor_id="v1", transport=transport) as client:
        assert client.track_page_view(referrer="https://t.co/abc", device="mobile") is True

    (request,) = seen
    assert request.method == "POST"
    assert request.url.path == "/api/event"
    assert json.loads(request.content) == {
        "type": "page_view",
        "visitorId": "v1",
        "referrer": "https://t.co/abc",
        "device": "mobile",
    }


def test_track_banner_click_omits_empty_optionals():
    transport, seen = _recording_transport()
    with AnalyticsClient("http://test", visitor_id="v1", transport=transport) as client:
        assert client.track_banner_click("ig", referrer="") is True

    assert json.loads(seen[0].content) == {"type": "banner_click", "bannerId": "ig", "visitorId": "v1"}


def test_tracking_failure_returns_false(caplog):
    transport, _ = _recording_transport(status=500, body={"error": "Internal server error"})
    with AnalyticsClient("http://test", visitor_id="v1", transport=transport) as client:
        assert client.track_page_view() is False
    assert "Failed to post analytics event" in caplog.text


def test_tracking_transport_error_returns_false():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with AnalyticsClient("http://test", transport=httpx.MockTransport(handler)) as client:
        assert client.track_banner_click("ig") is False


def test_fetch_stats_parses_summary():
    body = {
        "totalViews": 1,
        "uniqueVisitors": 1,
        "clicksByBanner": [{"id": "ig", "clicks": 1}],
        "devices": [{"device": "mobile", "count": 1}],
        "topReferrers": [{"referrer": "(direct)", "count": 1}],
    }
    transport, seen = _recording_transport(body=body)
    with AnalyticsClient("http://test", transport=transport) as client:
        summary = client.fetch_stats()

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/stats"
    assert summary.total_views == 1
    assert summary.clicks_by_banner[0].id == "ig"
    assert summary.to_json_dict() == body


def test_fetch_stats_error_raises():
    transport, _ = _recording_transport(status=500, body={"error": "Internal server error"})
    with AnalyticsClient("http://test", transport=transport) as client:
        with pytest.raises(StatsUnavailableError):
            client.fetch_stats()
