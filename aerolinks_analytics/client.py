"""
Tracking client for the Aerolinks Analytics API.

Thin callers of the two endpoints, mirroring what the banner page does:
    - track_page_view / track_banner_click: fire-and-forget POST /api/event.
      Failures are logged and reported as False, never raised, so tracking
      can't break the page that embeds it.
    - fetch_stats: GET /api/stats. Raises StatsUnavailableError so the
      dashboard can fall back to placeholder data.

LLM Prompt Example:
    "Show how to wrap httpx in a small client that degrades gracefully for
    telemetry writes but fails loudly for reads the UI depends on."
"""

import logging
import uuid
from typing import Any, Dict, Optional

import httpx

from .analytics.models import StatsSummary

log = logging.getLogger("aerolinks.client")


class StatsUnavailableError(RuntimeError):
    """The stats endpoint could not be reached or returned an error."""


def new_visitor_id() -> str:
    """Random pseudo-identity for a visitor (UUID4)."""
    return str(uuid.uuid4())


class AnalyticsClient:
    def __init__(
        self,
        base_url: str,
        visitor_id: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 5.0,
    ):
        """
        Args:
            base_url (str): Service root, e.g. "http://127.0.0.1:8000".
            visitor_id (Optional[str]): Stable id for this visitor; generated if omitted.
            transport (Optional[httpx.BaseTransport]): Custom transport (tests use MockTransport).
            timeout (float): Per-request timeout in seconds.
        """
        self.visitor_id = visitor_id or new_visitor_id()
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def __enter__(self) -> "AnalyticsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _post_event(self, body: Dict[str, Any]) -> bool:
        try:
            response = self._http.post("/api/event", json=body)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("Failed to post analytics event: %s", exc)
            return False
        return True

    def track_page_view(self, referrer: Optional[str] = None, device: Optional[str] = None) -> bool:
        body: Dict[str, Any] = {"type": "page_view", "visitorId": self.visitor_id}
        if referrer:
            body["referrer"] = referrer
        if device:
            body["device"] = device
        return self._post_event(body)

    def track_banner_click(
        self, banner_id: str, referrer: Optional[str] = None, device: Optional[str] = None
    ) -> bool:
        body: Dict[str, Any] = {
            "type": "banner_click",
            "bannerId": banner_id,
            "visitorId": self.visitor_id,
        }
        if referrer:
            body["referrer"] = referrer
        if device:
            body["device"] = device
        return self._post_event(body)

    def fetch_stats(self) -> StatsSummary:
        """
        Fetch the current summary.

        Raises:
            StatsUnavailableError: On transport failure, non-2xx status or an
                unreadable body.
        """
        try:
            response = self._http.get("/api/stats", headers={"Cache-Control": "no-store"})
            response.raise_for_status()
            return StatsSummary.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            raise StatsUnavailableError("Failed to load stats") from exc
