"""
Event schemas for Aerolinks Analytics.

Responsibilities:
    - Define the two inbound event shapes (page view, banner click)
    - Validate inbound payloads at the ingestion boundary
    - Define the stored record shape (event + server-assigned timestamp)

Wire format:
    Field names on the wire (and in the log) are camelCase (`visitorId`,
    `bannerId`); Python attributes are snake_case. The stored timestamp is
    written under the key `ts` as epoch milliseconds.

    {"type": "banner_click", "bannerId": "ig", "visitorId": "v1",
     "referrer": "https://t.co/abc", "ts": 1760781234567}

Notes:
    - Optional fields (`referrer`, `device`) are kept verbatim; normalization
      happens at aggregation time so raw values stay in the log.
    - Inbound `referrer` and `device` may be absent but not null.
    - Unknown extra keys are ignored, both inbound and when reading old/new
      records back from the log.
    - Stored records are read leniently: null optionals are accepted, a
      missing `ts` reads as None and a fractional `ts` is truncated to whole
      milliseconds.

LLM Prompt Example:
    "Show how to model a tagged union of analytics events with Pydantic v2
    discriminated unions and reuse it for both ingestion and storage."
"""

import math
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

__all__ = [
    "PageView",
    "BannerClick",
    "Event",
    "StoredPageView",
    "StoredBannerClick",
    "StoredEvent",
    "InvalidEventError",
    "parse_event",
    "parse_stored_event",
    "stamp",
]


class InvalidEventError(ValueError):
    """Raised when an inbound payload matches neither event shape."""


class _EventBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # Inbound optionals may be absent but not null; stored records are read leniently.
    allow_null_optionals: ClassVar[bool] = False

    visitor_id: str = Field(..., alias="visitorId", min_length=1)
    referrer: Optional[str] = None
    device: Optional[str] = None

    @field_validator("referrer", "device", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None and not cls.allow_null_optionals:
            raise ValueError("must be a string when present")
        return value

    @field_validator("timestamp", mode="before", check_fields=False)
    @classmethod
    def _whole_ms(cls, value: Any) -> Any:
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value


class PageView(_EventBase):
    """A visitor loaded the page."""
    type: Literal["page_view"] = "page_view"


class BannerClick(_EventBase):
    """A visitor clicked one of the banner cards."""
    type: Literal["banner_click"] = "banner_click"
    banner_id: str = Field(..., alias="bannerId", min_length=1)


class StoredPageView(PageView):
    allow_null_optionals: ClassVar[bool] = True
    timestamp: Optional[int] = Field(None, alias="ts")


class StoredBannerClick(BannerClick):
    allow_null_optionals: ClassVar[bool] = True
    timestamp: Optional[int] = Field(None, alias="ts")


Event = Annotated[Union[PageView, BannerClick], Field(discriminator="type")]
StoredEvent = Annotated[Union[StoredPageView, StoredBannerClick], Field(discriminator="type")]

_event_adapter = TypeAdapter(Event)
_stored_adapter = TypeAdapter(StoredEvent)


def parse_event(payload: Any) -> Union[PageView, BannerClick]:
    """
    Validate an inbound payload into an Event.

    Args:
        payload (Any): Decoded JSON body (expected to be an object).

    Returns:
        PageView | BannerClick: The validated event.

    Raises:
        InvalidEventError: If the payload is not an object, has an unknown
            `type`, misses a required field, or carries an empty required string.
    """
    try:
        return _event_adapter.validate_python(payload)
    except ValidationError as exc:
        raise InvalidEventError(f"Invalid payload: {exc.error_count()} error(s)") from exc


def parse_stored_event(data: Any) -> Union[StoredPageView, StoredBannerClick]:
    """Validate a decoded log record. Raises pydantic.ValidationError on mismatch."""
    return _stored_adapter.validate_python(data)


def stamp(event: Union[PageView, BannerClick], timestamp: int) -> Union[StoredPageView, StoredBannerClick]:
    """Attach a server-assigned timestamp (epoch ms) to an event."""
    data = event.model_dump(exclude_none=True)
    data["timestamp"] = timestamp
    if isinstance(event, BannerClick):
        return StoredBannerClick(**data)
    return StoredPageView(**data)
