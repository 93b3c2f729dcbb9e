"""
Proximity Alert Service - recent reports near a user's live location.

Feeds the transient "issue near you" banner. The caller only invokes this
once it has the user's coordinates (geolocation granted).

FILTER PIPELINE (in order):
1. Drop reports created before the time window (default 24h) or undated
2. Drop reports missing either coordinate
3. Drop soft-deleted reports
4. Keep reports within radius_km (default 5 km) by haversine distance
5. Sort nearest first

Time and distance are the only gates. The banner copy talks about critical
issues, but no severity filter is applied unless `min_severity` is passed
explicitly.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from app.services.severity import severity_rank
from app.utils.geo import distance_km, has_coordinates
from app.utils.timestamps import parse_timestamp, utc_now

DEFAULT_RADIUS_KM = 5.0
DEFAULT_WINDOW_HOURS = 24.0


def find_nearby(
    user_lat: float,
    user_lng: float,
    reports: Iterable[Dict[str, Any]],
    radius_km: float = DEFAULT_RADIUS_KM,
    within_last_hours: float = DEFAULT_WINDOW_HOURS,
    now: Optional[datetime] = None,
    min_severity: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Return copies of the qualifying reports with `distance_km` attached,
    sorted ascending by distance. Take the first element for a single banner.
    """
    now = parse_timestamp(now) or utc_now()
    since = now - timedelta(hours=within_last_hours)
    min_rank = severity_rank(min_severity) if min_severity else 0

    nearby = []
    for report in reports:
        created_at = parse_timestamp(report.get("created_at"))
        if created_at is None or created_at < since:
            continue
        if not has_coordinates(report):
            continue
        if report.get("deleted_at") is not None:
            continue
        if min_rank and severity_rank(report.get("severity")) < min_rank:
            continue

        distance = distance_km(user_lat, user_lng, float(report["latitude"]), float(report["longitude"]))
        if distance <= radius_km:
            nearby.append({**report, "distance_km": distance})

    nearby.sort(key=lambda r: r["distance_km"])
    return nearby


def format_distance(distance: float) -> str:
    """Banner display form, one decimal: 1.234 -> "1.2 km"."""
    return f"{distance:.1f} km"
