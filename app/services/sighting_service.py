"""
Sighting service - wildlife sightings for the biodiversity map layer.

Sightings share the report pipeline's rules for coordinates (both required,
range-checked by the request model) but have no severity, no moderation
status and no duplicate guard: the same turtle seen twice is two sightings.
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.core.errors import InvalidInputError, StoreUnavailableError
from app.core.settings import settings
from app.models.sighting import SightingCreate
from app.utils.firestore_helpers import snapshot_to_dict
from app.utils.timestamps import utc_now
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)


class SightingService:

    def __init__(self, db=None):
        if db is None:
            try:
                db = get_db()
            except RuntimeError as e:
                raise StoreUnavailableError(str(e))
        self.db = db

    @property
    def collection(self):
        return self.db.collection(settings.SIGHTINGS_COLLECTION)

    def list_sightings(self) -> List[Dict]:
        """All sightings, newest first."""
        try:
            query = self.collection.order_by("created_at", direction=firestore.Query.DESCENDING)
            return [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to list sightings: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read sightings: {e}")

    def create_sighting(self, data: SightingCreate) -> Dict:
        missing = []
        if not (data.species_name or "").strip():
            missing.append("species_name")
        if data.latitude is None:
            missing.append("latitude")
        if data.longitude is None:
            missing.append("longitude")
        if missing:
            raise InvalidInputError(f"Missing required field(s): {', '.join(missing)}", fields=missing)

        sighting = {
            "species_name": data.species_name.strip(),
            "description": data.description or None,
            "latitude": float(data.latitude),
            "longitude": float(data.longitude),
            "location": (data.location or "").strip() or None,
            "image_url": data.image_url,
            "reporter_name": data.reporter_name,
            "reporter_email": (data.reporter_email or "").strip().lower() or None,
            "created_at": utc_now(),
        }

        try:
            doc_ref = self.collection.document()
            doc_ref.set(sighting)
        except Exception as e:
            logger.error(f"Failed to save sighting: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not save sighting: {e}")

        logger.info(f"🦎 Sighting saved: {doc_ref.id} ({sighting['species_name']})")
        return {**sighting, "id": doc_ref.id}


# Global service instance
_sighting_service = None


def get_sighting_service() -> SightingService:
    global _sighting_service
    if _sighting_service is None:
        _sighting_service = SightingService()
    return _sighting_service
