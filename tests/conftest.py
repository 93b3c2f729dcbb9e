"""
Shared fixtures: every test runs against a fresh in-memory Firestore.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.config import firebase
from app.config.mock_firestore import MockFirestore
from app.services import mission_service, notification_service, report_store, sighting_service, story_service

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def mock_db(monkeypatch):
    db = MockFirestore()
    monkeypatch.setattr(firebase, "db", db)
    monkeypatch.setattr(report_store, "_report_store", None)
    monkeypatch.setattr(mission_service, "_mission_service", None)
    monkeypatch.setattr(notification_service, "_notification_sender", None)
    monkeypatch.setattr(sighting_service, "_sighting_service", None)
    monkeypatch.setattr(story_service, "_story_service", None)
    return db


@pytest.fixture
def client():
    from app.main import app
    return TestClient(app)


@pytest.fixture
def make_report():
    """Build a report dict; created_at defaults to one hour before NOW."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        report = {
            "id": f"r{counter['n']}",
            "location": "Calangute Beach",
            "latitude": 15.5,
            "longitude": 73.8,
            "description": "Plastic waste on beach",
            "severity": "low",
            "status": "pending",
            "image": None,
            "created_at": NOW - timedelta(hours=1),
            "deleted_at": None,
        }
        report.update(overrides)
        return report

    return _make


@pytest.fixture
def seed_report(mock_db):
    """Write a report document straight into the mock reports collection."""

    def _seed(doc_id, **fields):
        data = {
            "location": "Calangute Beach",
            "latitude": 15.5,
            "longitude": 73.8,
            "description": "Plastic waste on beach",
            "severity": "low",
            "status": "pending",
            "image": None,
            "created_at": datetime.now(timezone.utc) - timedelta(hours=1),
            "deleted_at": None,
        }
        data.update(fields)
        mock_db.collection("eco_reports").document(doc_id).set(data)
        return {**data, "id": doc_id}

    return _seed
