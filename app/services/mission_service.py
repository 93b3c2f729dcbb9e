"""
Mission service - cleanup missions and participant registrations.
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.core.errors import InvalidInputError, NotFoundError, StoreUnavailableError
from app.core.settings import settings
from app.models.mission import MissionCreate
from app.utils.firestore_helpers import snapshot_to_dict, where_filter
from datetime import date, timedelta
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class MissionService:
    """Missions are keyed by ISO date strings ("2026-10-21") so range queries sort correctly."""

    def __init__(self, db=None):
        if db is None:
            try:
                db = get_db()
            except RuntimeError as e:
                raise StoreUnavailableError(str(e))
        self.db = db

    @property
    def missions(self):
        return self.db.collection(settings.MISSIONS_COLLECTION)

    @property
    def registrations(self):
        return self.db.collection(settings.REGISTRATIONS_COLLECTION)

    def list_missions(self) -> List[Dict]:
        try:
            docs = self.missions.order_by("date", direction=firestore.Query.ASCENDING).stream()
            return [snapshot_to_dict(doc) for doc in docs]
        except Exception as e:
            logger.error(f"Failed to list missions: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read missions: {e}")

    def get_mission(self, mission_id: str) -> Dict:
        try:
            doc = self.missions.document(mission_id).get()
        except Exception as e:
            raise StoreUnavailableError(f"Could not read mission: {e}")
        if not doc.exists:
            raise NotFoundError(f"Mission {mission_id} not found", mission_id=mission_id)
        return snapshot_to_dict(doc)

    def create_mission(self, data: MissionCreate) -> Dict:
        mission = {
            "title": data.title.strip(),
            "date": data.date.isoformat(),
            "location": data.location,
            "description": data.description,
            "image": data.image,
            "trees_planted": data.trees_planted,
            "created_at": firestore.SERVER_TIMESTAMP,
        }
        doc_ref = self.missions.document()
        try:
            doc_ref.set(mission)
        except Exception as e:
            logger.error(f"Failed to save mission: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not save mission: {e}")

        logger.info(f"✅ Mission created: {doc_ref.id} ({mission['title']} on {mission['date']})")
        return {**mission, "id": doc_ref.id}

    def delete_mission(self, mission_id: str) -> int:
        """
        Delete a mission and its registrations.

        Returns:
            Number of registrations removed
        """
        self.get_mission(mission_id)
        registrations = self.list_participants(mission_id)
        try:
            for registration in registrations:
                self.registrations.document(registration["id"]).delete()
            self.missions.document(mission_id).delete()
        except Exception as e:
            logger.error(f"Failed to delete mission {mission_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not delete mission: {e}")

        logger.info(f"🗑️ Mission {mission_id} deleted with {len(registrations)} registration(s)")
        return len(registrations)

    def list_registrations(self) -> List[Dict]:
        try:
            return [snapshot_to_dict(doc) for doc in self.registrations.stream()]
        except Exception as e:
            logger.error(f"Failed to read registrations: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read registrations: {e}")

    def list_upcoming(self, today: date, lookahead_days: int) -> List[Dict]:
        """Missions dated today through today + lookahead_days, inclusive."""
        start = today.isoformat()
        end = (today + timedelta(days=lookahead_days)).isoformat()
        try:
            query = where_filter(self.missions, "date", ">=", start)
            query = where_filter(query, "date", "<=", end)
            return [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to query upcoming missions: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read missions: {e}")

    def list_participants(self, mission_id: str) -> List[Dict]:
        try:
            query = where_filter(self.registrations, "mission_id", "==", mission_id)
            return [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to read participants for {mission_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read participants: {e}")

    def join_mission(self, mission_id: str, name: str, email: str, phone: Optional[str] = None) -> Dict:
        """
        Register a participant. One registration per email per mission.
        """
        mission = self.get_mission(mission_id)
        email = email.strip().lower()

        for registration in self.list_participants(mission_id):
            if (registration.get("email") or "").lower() == email:
                raise InvalidInputError(
                    f"{email} has already joined '{mission.get('title')}'",
                    registration_id=registration["id"],
                )

        doc_ref = self.registrations.document()
        registration = {
            "mission_id": mission_id,
            "name": name.strip(),
            "email": email,
            "phone": phone,
            "created_at": firestore.SERVER_TIMESTAMP,
        }
        try:
            doc_ref.set(registration)
        except Exception as e:
            logger.error(f"Failed to save registration: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not save registration: {e}")

        logger.info(f"✅ {email} joined mission {mission_id}")
        return {**registration, "id": doc_ref.id}


# Global service instance
_mission_service = None


def get_mission_service() -> MissionService:
    """Get or create MissionService singleton."""
    global _mission_service
    if _mission_service is None:
        _mission_service = MissionService()
    return _mission_service
