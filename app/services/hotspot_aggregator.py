"""
Hotspot Aggregator - groups active reports into map hotspots.

A hotspot is every active report sharing one coordinate pair. Hotspots are
derived on every call and never stored.

GROUPING RULES:
- Key is "{lat},{lng}" built from the exact coordinate values
- First report seen at a key supplies the location label and coordinates
- Severity is the highest-ranked severity among member reports
- Member order follows input order (callers pass newest-first lists)
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
import logging

from app.services.severity import higher_severity
from app.utils.geo import has_coordinates

logger = logging.getLogger(__name__)


def _format_coordinate(value: float) -> str:
    """
    Render a coordinate the way the web client's `${lat},${lng}` keys do:
    shortest round-trip digits, no trailing ".0", positional notation for
    exponents from -6 to 20 and "1e-7" style beyond that.
    """
    value = float(value)
    if value == 0:
        return "0"
    text = repr(value)
    if "e" not in text:
        return text[:-2] if text.endswith(".0") else text

    mantissa, exponent = text.split("e")
    exponent = int(exponent)
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{exponent:+d}"


def coordinate_key(latitude: float, longitude: float, precision: Optional[int] = None) -> str:
    """Build the "{lat},{lng}" grouping key, optionally snapping to `precision` decimals."""
    if precision is not None:
        latitude = round(float(latitude), precision)
        longitude = round(float(longitude), precision)
    return f"{_format_coordinate(latitude)},{_format_coordinate(longitude)}"


def aggregate(reports: Iterable[Dict[str, Any]], precision: Optional[int] = None) -> Dict[str, Dict[str, Any]]:
    """
    Group reports by coordinate key in a single pass.

    Args:
        reports: Active reports, newest first.
        precision: None for exact-coordinate keys. An int rounds coordinates
            to that many decimals before keying, merging GPS jitter.

    Returns:
        Dict of key -> hotspot dict with location, latitude, longitude,
        severity, reports and count.
    """
    hotspots: Dict[str, Dict[str, Any]] = {}
    skipped = 0

    for report in reports:
        if not has_coordinates(report):
            skipped += 1
            continue

        key = coordinate_key(report["latitude"], report["longitude"], precision)
        bucket = hotspots.get(key)
        if bucket is None:
            bucket = {
                "location": report.get("location"),
                "latitude": float(report["latitude"]),
                "longitude": float(report["longitude"]),
                "severity": report.get("severity"),
                "reports": [],
                "count": 0,
            }
            hotspots[key] = bucket

        bucket["reports"].append(report)
        bucket["count"] = len(bucket["reports"])
        bucket["severity"] = higher_severity(bucket["severity"], report.get("severity"))

    if skipped:
        logger.debug(f"Skipped {skipped} report(s) without coordinates during aggregation")

    return hotspots


def rank_hotspots(hotspots: Dict[str, Dict[str, Any]], severity: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Hotspot cards for the heatmap: optionally filtered to one severity,
    busiest locations first. Ties keep aggregation order.
    """
    cards = []
    for key, hotspot in hotspots.items():
        if severity and severity != "all" and hotspot.get("severity") != severity:
            continue
        cards.append({"key": key, **hotspot})
    cards.sort(key=lambda card: card["count"], reverse=True)
    return cards
