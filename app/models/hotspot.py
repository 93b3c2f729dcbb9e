"""
Response models for heatmap hotspots and nearby alerts.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from app.models.report import ReportResponse


class Hotspot(BaseModel):
    location: Optional[str] = None
    latitude: float
    longitude: float
    severity: Optional[str] = None
    count: int
    reports: List[ReportResponse] = Field(default_factory=list, description="Member reports, newest first")


class HotspotCard(Hotspot):
    key: str = Field(..., description="Coordinate key, '{lat},{lng}'")


class HotspotMapResponse(BaseModel):
    total_reports: int
    hotspots: Dict[str, Hotspot] = Field(..., description="Hotspots keyed by coordinate string")
    cards: List[HotspotCard] = Field(..., description="Hotspots ranked by report count")


class NearbyAlert(ReportResponse):
    distance_km: float
    distance_display: str = Field(..., description="Distance rounded to one decimal, e.g. '1.2 km'")


class NearbyAlertsResponse(BaseModel):
    alerts: List[NearbyAlert] = Field(default_factory=list, description="Nearest first")
