"""
Duplicate Detection - keeps the same observation from being filed twice.

POLICY:
- A candidate is a duplicate iff an active (not soft-deleted) report sits at
  exactly the same latitude/longitude AND its description matches after
  trimming surrounding whitespace and ignoring case.
- Coordinates are compared with exact float equality. No tolerance radius.
- Same spot, different description = a second legitimate observation.

The check is a read-then-write pre-check: two submissions racing each other
can both pass. `dedupe_key` gives the store a value to put a unique index on.
"""

from typing import Dict, Iterable, Optional
import logging

logger = logging.getLogger(__name__)

# Rounding used for the store-side dedupe key (4 decimals ~= 11 m)
DEDUPE_KEY_PRECISION = 4


def normalize_description(description: Optional[str]) -> str:
    return (description or "").strip().lower()


def _same_coordinates(a: Dict, b: Dict) -> bool:
    return a.get("latitude") == b.get("latitude") and a.get("longitude") == b.get("longitude")


def find_duplicate(candidate: Dict, existing_at_same_coordinates: Iterable[Dict]) -> Optional[Dict]:
    """
    Return the first existing report the candidate duplicates, or None.

    Blank descriptions normalize to "" and therefore match each other; the
    submission path rejects blank descriptions before this is reached.
    """
    wanted = normalize_description(candidate.get("description"))

    for existing in existing_at_same_coordinates:
        if existing.get("deleted_at") is not None:
            continue
        if not _same_coordinates(candidate, existing):
            continue
        if normalize_description(existing.get("description")) == wanted:
            logger.warning(
                f"Duplicate report detected at ({candidate.get('latitude')}, "
                f"{candidate.get('longitude')}) - matches report {existing.get('id')}"
            )
            return existing

    return None


def is_duplicate(candidate: Dict, existing_at_same_coordinates: Iterable[Dict]) -> bool:
    return find_duplicate(candidate, existing_at_same_coordinates) is not None


def dedupe_key(latitude: float, longitude: float, description: Optional[str]) -> str:
    """
    Store-side uniqueness key: rounded coordinates + normalized description.
    Coarser than the guard itself; meant for a unique index on the collection.
    """
    return (
        f"{round(latitude, DEDUPE_KEY_PRECISION)},"
        f"{round(longitude, DEDUPE_KEY_PRECISION)}|"
        f"{normalize_description(description)}"
    )
