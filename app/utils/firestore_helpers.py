"""
Firestore query helpers shared by the store classes.

NOTE: For firebase_admin SDK, we use positional where() arguments, which
work against both the real client and the mock DB.
"""

from typing import Any, Dict, Optional


def where_filter(query, field_path: str, op_string: str, value):
    """
    Usage:
        query = where_filter(collection, "latitude", "==", 15.5)
        query = where_filter(query, "longitude", "==", 73.8)
    """
    return query.where(field_path, op_string, value)


def snapshot_to_dict(doc) -> Optional[Dict[str, Any]]:
    """Document snapshot -> plain dict with its document id under "id"."""
    data = doc.to_dict()
    if data is None:
        return None
    data["id"] = doc.id
    return data
