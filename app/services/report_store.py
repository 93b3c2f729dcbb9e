"""
Report Store - Firestore persistence for eco reports.

Every read used by aggregation, proximity alerts and duplicate checks goes
through list_active() / find_at_coordinates(), which never return
soft-deleted documents. Firestore failures surface as StoreUnavailableError.
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.core.errors import InvalidInputError, NotFoundError, StoreUnavailableError
from app.core.settings import settings
from app.models.report import ReportStatus
from app.services.duplicate_detection import dedupe_key
from app.services.severity import normalize_severity
from app.utils.firestore_helpers import snapshot_to_dict, where_filter
from app.utils.timestamps import utc_now
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ReportStore:
    """
    Thin data-access layer over the reports collection.
    """

    def __init__(self, db=None, collection: Optional[str] = None):
        if db is None:
            try:
                db = get_db()
            except RuntimeError as e:
                raise StoreUnavailableError(str(e))
        self.db = db
        self.collection_name = collection or settings.REPORTS_COLLECTION

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    def list_all(self, include_deleted: bool = False) -> List[Dict]:
        """All reports, newest first."""
        try:
            query = self.collection.order_by("created_at", direction=firestore.Query.DESCENDING)
            reports = [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to list reports: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read reports: {e}")

        reports = [r for r in reports if r is not None]
        if include_deleted:
            return reports
        return [r for r in reports if r.get("deleted_at") is None]

    def list_active(self) -> List[Dict]:
        """Non-soft-deleted reports, newest first."""
        return self.list_all(include_deleted=False)

    def find_at_coordinates(self, latitude: float, longitude: float) -> List[Dict]:
        """Active reports at exactly this coordinate pair."""
        try:
            query = where_filter(self.collection, "latitude", "==", latitude)
            query = where_filter(query, "longitude", "==", longitude)
            reports = [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to query reports at ({latitude}, {longitude}): {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read reports: {e}")

        return [r for r in reports if r is not None and r.get("deleted_at") is None]

    def get(self, report_id: str) -> Dict:
        try:
            doc = self.collection.document(report_id).get()
        except Exception as e:
            logger.error(f"Failed to read report {report_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read report: {e}")

        if not doc.exists:
            raise NotFoundError(f"Report {report_id} not found", report_id=report_id)
        return snapshot_to_dict(doc)

    def insert(self, candidate: Dict) -> Dict:
        """
        Persist a validated candidate. Assigns id, created_at and the
        pending status; severity is normalized from free text.
        """
        report = {
            "location": candidate.get("location"),
            "latitude": float(candidate["latitude"]),
            "longitude": float(candidate["longitude"]),
            "description": candidate["description"],
            "severity": normalize_severity(candidate.get("severity")),
            "status": ReportStatus.PENDING.value,
            "image": candidate.get("image"),
            "dedupe_key": dedupe_key(candidate["latitude"], candidate["longitude"], candidate["description"]),
            "created_at": utc_now(),
            "deleted_at": None,
        }

        try:
            doc_ref = self.collection.document()
            doc_ref.set(report)
            logger.info(f"Report saved to Firestore: {doc_ref.id}")
        except Exception as e:
            logger.error(f"Failed to save report to Firestore: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not save report: {e}")

        report["id"] = doc_ref.id
        return report

    def _update(self, report_id: str, changes: Dict) -> Dict:
        self.get(report_id)
        try:
            self.collection.document(report_id).update(changes)
        except Exception as e:
            logger.error(f"Failed to update report {report_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not update report: {e}")
        return self.get(report_id)

    def soft_delete(self, report_id: str) -> Dict:
        report = self._update(report_id, {"deleted_at": utc_now()})
        logger.info(f"Report {report_id} soft-deleted")
        return report

    def restore(self, report_id: str) -> Dict:
        report = self._update(report_id, {"deleted_at": None})
        logger.info(f"Report {report_id} restored")
        return report

    def set_status(self, report_id: str, status: str) -> Dict:
        try:
            status = ReportStatus(status).value
        except ValueError:
            allowed = [s.value for s in ReportStatus]
            raise InvalidInputError(f"Unknown status {status!r}. Allowed: {allowed}")
        report = self._update(report_id, {"status": status})
        logger.info(f"Report {report_id} status set to {status}")
        return report


# Global store instance (singleton pattern)
_report_store = None


def get_report_store() -> ReportStore:
    """Get or create the ReportStore singleton."""
    global _report_store
    if _report_store is None:
        _report_store = ReportStore()
    return _report_store
