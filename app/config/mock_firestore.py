"""
In-memory stand-in for the Firestore client used when USE_MOCK_DB is enabled.

Implements the subset of the google-cloud-firestore surface this app touches:
collection/document references, set/update/get/delete, and queries built from
where/order_by/offset/limit followed by stream(), and Increment transforms on
update(). Data can optionally be persisted to
a JSON file so local development keeps its state between restarts.
"""

import copy
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from firebase_admin import firestore

logger = logging.getLogger(__name__)

_OPERATORS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
    "in": lambda a, b: a in b,
    "not-in": lambda a, b: a not in b,
    "array_contains": lambda a, b: isinstance(a, list) and b in a,
}


def _resolve_sentinels(data: Dict[str, Any]) -> Dict[str, Any]:
    resolved = {}
    for key, value in data.items():
        if value is firestore.SERVER_TIMESTAMP:
            value = datetime.now(timezone.utc)
        resolved[key] = copy.deepcopy(value)
    return resolved


def _apply_transforms(current: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    applied = {}
    for key, value in changes.items():
        if isinstance(value, firestore.Increment):
            value = (current.get(key) or 0) + value.value
        applied[key] = value
    return applied


def _sort_value(value: Any) -> Any:
    # Persisted timestamps come back as ISO strings; compare live ones the same way
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat()
    return value


class MockDocumentSnapshot:
    def __init__(self, reference: "MockDocumentReference", data: Optional[Dict[str, Any]]):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data) if self._data is not None else None

    def get(self, field: str) -> Any:
        return (self._data or {}).get(field)


class MockDocumentReference:
    def __init__(self, store: "MockFirestore", collection: str, doc_id: str):
        self._store = store
        self._collection = collection
        self.id = doc_id

    @property
    def _docs(self) -> Dict[str, Dict[str, Any]]:
        return self._store._data.setdefault(self._collection, {})

    def set(self, data: Dict[str, Any], merge: bool = False) -> None:
        resolved = _resolve_sentinels(data)
        if merge and self.id in self._docs:
            self._docs[self.id].update(resolved)
        else:
            self._docs[self.id] = resolved
        self._store._persist()

    def update(self, data: Dict[str, Any]) -> None:
        if self.id not in self._docs:
            raise KeyError(f"No document to update: {self._collection}/{self.id}")
        current = self._docs[self.id]
        current.update(_resolve_sentinels(_apply_transforms(current, data)))
        self._store._persist()

    def get(self) -> MockDocumentSnapshot:
        return MockDocumentSnapshot(self, self._docs.get(self.id))

    def delete(self) -> None:
        self._docs.pop(self.id, None)
        self._store._persist()


class MockQuery:
    def __init__(self, store: "MockFirestore", collection: str,
                 filters: Optional[List[tuple]] = None,
                 orders: Optional[List[tuple]] = None,
                 limit_count: Optional[int] = None,
                 offset_count: int = 0):
        self._store = store
        self._collection = collection
        self._filters = filters or []
        self._orders = orders or []
        self._limit = limit_count
        self._offset = offset_count

    def _copy(self, **changes) -> "MockQuery":
        params = {
            "filters": list(self._filters),
            "orders": list(self._orders),
            "limit_count": self._limit,
            "offset_count": self._offset,
        }
        params.update(changes)
        return MockQuery(self._store, self._collection, **params)

    def where(self, field_path: str, op_string: str, value: Any) -> "MockQuery":
        if op_string not in _OPERATORS:
            raise ValueError(f"Unsupported operator: {op_string}")
        return self._copy(filters=self._filters + [(field_path, op_string, value)])

    def order_by(self, field_path: str, direction: str = "ASCENDING") -> "MockQuery":
        return self._copy(orders=self._orders + [(field_path, direction)])

    def limit(self, count: int) -> "MockQuery":
        return self._copy(limit_count=count)

    def offset(self, num_to_skip: int) -> "MockQuery":
        return self._copy(offset_count=num_to_skip)

    def _matches(self, data: Dict[str, Any]) -> bool:
        for field_path, op_string, value in self._filters:
            if field_path not in data:
                # Firestore never matches documents that lack the filtered field
                return False
            try:
                if not _OPERATORS[op_string](data[field_path], value):
                    return False
            except TypeError:
                return False
        return True

    def stream(self):
        docs = self._store._data.get(self._collection, {})
        matched = [(doc_id, data) for doc_id, data in docs.items() if self._matches(data)]

        for field_path, direction in reversed(self._orders):
            matched = [item for item in matched if item[1].get(field_path) is not None]
            matched.sort(
                key=lambda item: _sort_value(item[1][field_path]),
                reverse=(direction == firestore.Query.DESCENDING),
            )

        if self._offset:
            matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[: self._limit]

        for doc_id, data in matched:
            ref = MockDocumentReference(self._store, self._collection, doc_id)
            yield MockDocumentSnapshot(ref, data)

    def get(self) -> List[MockDocumentSnapshot]:
        return list(self.stream())


class MockCollectionReference(MockQuery):
    def __init__(self, store: "MockFirestore", collection: str):
        super().__init__(store, collection)
        self.id = collection

    def document(self, doc_id: Optional[str] = None) -> MockDocumentReference:
        return MockDocumentReference(self._store, self._collection, doc_id or uuid.uuid4().hex[:20])

    def add(self, data: Dict[str, Any]):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class MockFirestore:
    """Dictionary-backed Firestore client: {collection: {doc_id: data}}."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                self._data = json.load(f)
            logger.info(f"Loaded mock database from {path}")

    def collection(self, name: str) -> MockCollectionReference:
        return MockCollectionReference(self, name)

    def collections(self) -> List[MockCollectionReference]:
        return [MockCollectionReference(self, name) for name in self._data]

    def _persist(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, default=lambda v: v.isoformat() if isinstance(v, datetime) else str(v))


def get_mock_db(path: Optional[str] = None) -> MockFirestore:
    return MockFirestore(path)
