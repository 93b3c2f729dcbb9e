"""Map routes - heatmap hotspots and nearby-issue alerts.

Both endpoints read the full active report list and derive their view on
every call; nothing here is cached or stored.
"""

import asyncio
import logging
from functools import partial
from typing import Optional

from fastapi import APIRouter, Query

from app.models.hotspot import HotspotMapResponse, NearbyAlertsResponse
from app.services.map_service import get_hotspot_map, get_nearby_alerts
from app.services.severity import Severity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Map"])

HOTSPOT_SEVERITY_FILTER = "^(" + "|".join([s.value for s in Severity] + ["all"]) + ")$"


@router.get("/hotspots", response_model=HotspotMapResponse)
async def hotspots(
    severity: Optional[str] = Query(
        None,
        pattern=HOTSPOT_SEVERITY_FILTER,
        description="Only include cards of this severity; \"all\" disables the filter",
    ),
):
    """
    Active reports grouped by exact coordinates.

    `hotspots` is keyed by "{lat},{lng}" for map markers; `cards` lists the
    same hotspots (optionally filtered by severity) busiest first.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, partial(get_hotspot_map, severity=severity)
    )


@router.get("/alerts/nearby", response_model=NearbyAlertsResponse)
async def nearby_alerts(
    lat: float = Query(..., ge=-90, le=90, description="User latitude"),
    lng: float = Query(..., ge=-180, le=180, description="User longitude"),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in km (default 5)"),
    hours: Optional[float] = Query(None, gt=0, description="Only reports from the last N hours (default 24)"),
    min_severity: Optional[Severity] = Query(
        None, description="Opt-in severity floor; by default any recent nearby report qualifies"
    ),
):
    """
    Recent reports near the caller, nearest first. The client shows the
    first entry as a banner.
    """
    loop = asyncio.get_running_loop()
    alerts = await loop.run_in_executor(
        None,
        partial(
            get_nearby_alerts,
            lat,
            lng,
            radius_km=radius,
            within_last_hours=hours,
            min_severity=min_severity.value if min_severity else None,
        ),
    )
    return {"alerts": alerts}
