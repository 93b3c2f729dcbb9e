"""
Map service - shapes the active report list for the heatmap and the
nearby-alert banner.

Both views read the same input: every active report, newest first.
"""

from typing import Any, Dict, List, Optional
import logging

from app.core.errors import StoreUnavailableError
from app.core.settings import settings
from app.services.hotspot_aggregator import aggregate, rank_hotspots
from app.services.proximity_alerts import find_nearby, format_distance
from app.services.report_store import ReportStore, get_report_store
from app.services.severity import normalize_severity

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"


def prepare_map_reports(reports: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Fill display defaults before grouping: a location label for unlabeled
    reports and canonical severities for records stored before normalization.
    """
    prepared = []
    for report in reports:
        prepared.append({
            **report,
            "location": report.get("location") or UNKNOWN_LOCATION,
            "severity": normalize_severity(report.get("severity")),
        })
    return prepared


def get_hotspot_map(severity: Optional[str] = None, store: Optional[ReportStore] = None) -> Dict[str, Any]:
    """
    Hotspots keyed by coordinate string plus the ranked card list.

    Raises StoreUnavailableError if the report list cannot be read.
    """
    store = store or get_report_store()
    reports = prepare_map_reports(store.list_active())

    hotspots = aggregate(reports, precision=settings.HOTSPOT_COORDINATE_PRECISION)
    logger.info(f"🗺️ Hotspots ready: {len(reports)} reports, {len(hotspots)} unique locations")

    return {
        "total_reports": len(reports),
        "hotspots": hotspots,
        "cards": rank_hotspots(hotspots, severity=severity),
    }


def get_nearby_alerts(
    lat: float,
    lng: float,
    radius_km: Optional[float] = None,
    within_last_hours: Optional[float] = None,
    min_severity: Optional[str] = None,
    store: Optional[ReportStore] = None,
) -> List[Dict[str, Any]]:
    """
    Nearby recent reports for the alert banner, nearest first.

    A store outage yields an empty list; the banner is best-effort.
    """
    radius_km = radius_km if radius_km is not None else settings.ALERT_RADIUS_KM
    within_last_hours = within_last_hours if within_last_hours is not None else settings.ALERT_WINDOW_HOURS

    try:
        store = store or get_report_store()
        reports = prepare_map_reports(store.list_active())
    except StoreUnavailableError as e:
        logger.error(f"Proximity alert lookup failed, returning no alerts: {e}")
        return []

    alerts = find_nearby(
        lat,
        lng,
        reports,
        radius_km=radius_km,
        within_last_hours=within_last_hours,
        min_severity=min_severity,
    )
    for alert in alerts:
        alert["distance_display"] = format_distance(alert["distance_km"])
    return alerts
