"""
Response models for the stats summary.

JSON keys are camelCase to match what the dashboard consumes.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class BannerClicks(_Model):
    id: str
    clicks: int


class DeviceCount(_Model):
    device: str
    count: int


class ReferrerCount(_Model):
    referrer: str
    count: int


class StatsSummary(_Model):
    total_views: int = Field(0, alias="totalViews")
    unique_visitors: int = Field(0, alias="uniqueVisitors")
    clicks_by_banner: List[BannerClicks] = Field(default_factory=list, alias="clicksByBanner")
    devices: List[DeviceCount] = Field(default_factory=list)
    top_referrers: List[ReferrerCount] = Field(default_factory=list, alias="topReferrers")

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase wire keys."""
        return self.model_dump(by_alias=True)
