"""
Report service - Business logic for citizen report handling.

SUBMISSION FLOW:
1. Validate required fields (coordinates, description) -> invalid_input
2. Duplicate Guard against active reports at the same coordinates
   -> duplicate_report (nothing is stored)
3. Persist through the Report Store

There is no transaction spanning steps 2 and 3; see duplicate_detection.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional
import logging

from app.core.errors import DuplicateReportError, InvalidInputError
from app.models.report import ReportCreate, ReportStatus
from app.services.duplicate_detection import find_duplicate
from app.services.report_store import ReportStore, get_report_store
from app.services.severity import Severity

logger = logging.getLogger(__name__)


def validate_candidate(report_data: ReportCreate) -> Dict:
    """
    Turn the request model into a candidate dict, rejecting submissions
    that lack coordinates or a non-blank description.
    """
    missing = []
    if report_data.latitude is None:
        missing.append("latitude")
    if report_data.longitude is None:
        missing.append("longitude")
    if not (report_data.description or "").strip():
        missing.append("description")

    if missing:
        raise InvalidInputError(f"Missing required field(s): {', '.join(missing)}", fields=missing)

    return {
        "location": (report_data.location or "").strip() or None,
        "latitude": report_data.latitude,
        "longitude": report_data.longitude,
        "description": report_data.description,
        "severity": report_data.severity,
        "image": report_data.image,
    }


def create_report(report_data: ReportCreate, store: Optional[ReportStore] = None) -> Dict:
    """
    Validate, de-duplicate and store a new report.

    Raises:
        InvalidInputError: coordinates or description missing
        DuplicateReportError: identical report already at these coordinates
        StoreUnavailableError: Firestore read/write failed
    """
    store = store or get_report_store()
    candidate = validate_candidate(report_data)

    existing = store.find_at_coordinates(candidate["latitude"], candidate["longitude"])
    duplicate = find_duplicate(candidate, existing)
    if duplicate is not None:
        raise DuplicateReportError(existing_report_id=duplicate["id"])

    report = store.insert(candidate)
    logger.info(f"✅ Report created: {report['id']} (severity={report['severity']})")
    return report


def get_active_reports(store: Optional[ReportStore] = None) -> List[Dict]:
    store = store or get_report_store()
    return store.list_active()


def get_report(report_id: str, store: Optional[ReportStore] = None) -> Dict:
    store = store or get_report_store()
    return store.get(report_id)


def compute_report_stats(reports: Iterable[Dict]) -> Dict:
    """Counts by moderation status and severity. Every known level appears, even at zero."""
    by_status = {status.value: 0 for status in ReportStatus}
    by_severity = {level.value: 0 for level in Severity}
    total = 0

    statuses = Counter()
    severities = Counter()
    for report in reports:
        total += 1
        statuses[(report.get("status") or ReportStatus.PENDING.value).lower()] += 1
        severities[(report.get("severity") or Severity.LOW.value).lower()] += 1

    by_status.update(statuses)
    by_severity.update(severities)
    return {"total": total, "by_status": by_status, "by_severity": by_severity}


def get_report_stats(store: Optional[ReportStore] = None) -> Dict:
    return compute_report_stats(get_active_reports(store))
