"""
Story service - the eco-stories feed (before/after cleanup posts).
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.core.errors import InvalidInputError, NotFoundError, StoreUnavailableError
from app.core.settings import settings
from app.models.story import StoryCreate
from app.services.mission_service import MissionService
from app.utils.firestore_helpers import snapshot_to_dict
from app.utils.timestamps import utc_now
from typing import Dict, List, Optional
import logging
import math

logger = logging.getLogger(__name__)


class StoryService:

    def __init__(self, db=None):
        if db is None:
            try:
                db = get_db()
            except RuntimeError as e:
                raise StoreUnavailableError(str(e))
        self.db = db

    @property
    def collection(self):
        return self.db.collection(settings.STORIES_COLLECTION)

    def list_stories(self, page: int = 1, limit: Optional[int] = None) -> Dict:
        """
        One page of the feed, newest first.

        Returns:
            {"stories": [...], "total": n, "page": page, "total_pages": n}
        """
        limit = limit or settings.STORIES_PAGE_SIZE
        if page < 1 or limit < 1:
            raise InvalidInputError("page and limit must be positive")
        limit = min(limit, settings.STORIES_MAX_PAGE_SIZE)

        try:
            total = sum(1 for _ in self.collection.stream())
            query = (
                self.collection.order_by("created_at", direction=firestore.Query.DESCENDING)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            stories = [snapshot_to_dict(doc) for doc in query.stream()]
        except Exception as e:
            logger.error(f"Failed to list stories: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read stories: {e}")

        return {
            "stories": stories,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
        }

    def list_all(self) -> List[Dict]:
        try:
            return [snapshot_to_dict(doc) for doc in self.collection.stream()]
        except Exception as e:
            logger.error(f"Failed to read stories: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not read stories: {e}")

    def create_story(self, data: StoryCreate) -> Dict:
        title = data.title.strip()
        if not title:
            raise InvalidInputError("Title is required", fields=["title"])

        if data.mission_id:
            MissionService(db=self.db).get_mission(data.mission_id)

        story = {
            "title": title,
            "description": data.description or None,
            "mission_id": data.mission_id or None,
            "before_image": data.before_image,
            "after_image": data.after_image,
            "author_name": data.author_name,
            "author_email": (data.author_email or "").strip().lower() or None,
            "likes_count": 0,
            "created_at": utc_now(),
        }

        try:
            doc_ref = self.collection.document()
            doc_ref.set(story)
        except Exception as e:
            logger.error(f"Failed to save story: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not save story: {e}")

        logger.info(f"✅ Story created: {doc_ref.id}")
        return {**story, "id": doc_ref.id}

    def like_story(self, story_id: str) -> int:
        """Increment the like counter atomically and return the new count."""
        doc_ref = self.collection.document(story_id)
        try:
            if not doc_ref.get().exists:
                raise NotFoundError(f"Story {story_id} not found", story_id=story_id)
            doc_ref.update({"likes_count": firestore.Increment(1)})
            return doc_ref.get().to_dict().get("likes_count", 0)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to like story {story_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Could not update story: {e}")


# Global service instance
_story_service = None


def get_story_service() -> StoryService:
    global _story_service
    if _story_service is None:
        _story_service = StoryService()
    return _story_service
