from datetime import date

import pytest

from app.core.errors import InvalidInputError, NotFoundError
from app.services.mission_reminder import (
    build_reminder_body,
    build_reminder_subject,
    days_until,
    send_mission_reminders,
)
from app.services.mission_service import MissionService
from app.services.notification_service import NotificationSender

TODAY = date(2026, 10, 19)


@pytest.fixture
def missions(mock_db):
    collection = mock_db.collection("missions")
    collection.document("m-today").set({"title": "Baga Beach Sweep", "date": "2026-10-19", "location": "Baga Beach"})
    collection.document("m-soon").set({"title": "Mandovi Mangroves", "date": "2026-10-21", "location": "Panaji"})
    collection.document("m-later").set({"title": "Chapora Fort Trail", "date": "2026-11-15", "location": "Chapora"})
    collection.document("m-past").set({"title": "Colva Cleanup", "date": "2026-10-01", "location": "Colva"})
    return MissionService(db=mock_db)


def register(mock_db, mission_id, email, name="Volunteer"):
    mock_db.collection("mission_registrations").document().set(
        {"mission_id": mission_id, "name": name, "email": email}
    )


def test_list_missions_by_date(client, missions):
    resp = client.get("/api/missions")

    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()] == ["m-past", "m-today", "m-soon", "m-later"]


def test_join_mission(client, missions, mock_db):
    resp = client.post(
        "/api/missions/m-soon/join",
        json={"name": "Asha Naik", "email": "Asha@Example.com", "phone": "+91 98220 00000"},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["mission_id"] == "m-soon"

    participants = missions.list_participants("m-soon")
    assert [p["email"] for p in participants] == ["asha@example.com"]
    assert participants[0]["id"] == body["registration_id"]


def test_joining_twice_is_rejected(client, missions):
    payload = {"name": "Asha", "email": "asha@example.com"}
    client.post("/api/missions/m-soon/join", json=payload)

    resp = client.post("/api/missions/m-soon/join", json={**payload, "email": "ASHA@example.com"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_input"
    assert resp.json()["registration_id"]


def test_joining_unknown_mission(client, missions):
    resp = client.post("/api/missions/nope/join", json={"name": "Asha", "email": "asha@example.com"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_join_requires_an_email(client, missions):
    resp = client.post("/api/missions/m-soon/join", json={"name": "Asha", "email": "not-an-email"})
    assert resp.status_code == 422


def test_get_mission_unknown(missions):
    with pytest.raises(NotFoundError):
        missions.get_mission("nope")


def test_list_upcoming_window_is_inclusive(missions):
    upcoming = missions.list_upcoming(TODAY, 2)
    assert sorted(m["id"] for m in upcoming) == ["m-soon", "m-today"]
    assert missions.list_upcoming(TODAY, 0)[0]["id"] == "m-today"


def test_days_until():
    assert days_until("2026-10-21", TODAY) == 2
    assert days_until(date(2026, 10, 19), TODAY) == 0
    assert days_until("2026-10-20T00:00:00", TODAY) == 1


def test_reminder_subjects():
    assert build_reminder_subject("Beach Sweep", 0) == "Mission Reminder: Beach Sweep - TODAY!"
    assert build_reminder_subject("Beach Sweep", 1) == "Mission Reminder: Beach Sweep - Tomorrow!"
    assert build_reminder_subject("Beach Sweep", 3) == "Mission Reminder: Beach Sweep - In 3 days"


def test_reminder_body_mentions_mission_details():
    body = build_reminder_body("Asha", {"title": "Mandovi Mangroves", "date": "2026-10-21", "location": "Panaji"}, 2)

    assert body.startswith("Hey Asha!")
    assert "Wednesday, 21 October 2026" in body
    assert "Location: Panaji" in body


def test_send_mission_reminders(missions, mock_db):
    register(mock_db, "m-today", "a@example.com")
    register(mock_db, "m-today", "b@example.com")
    register(mock_db, "m-later", "c@example.com")

    summary = send_mission_reminders(today=TODAY, lookahead_days=3, missions=missions,
                                     sender=NotificationSender(db=mock_db))

    assert summary == {"missions": 2, "sent": 2, "failed": 0, "skipped_missions": 1}

    sent = [doc.to_dict() for doc in mock_db.collection("notifications").stream()]
    assert sorted(n["recipient"] for n in sent) == ["a@example.com", "b@example.com"]
    assert all(n["subject"] == "Mission Reminder: Baga Beach Sweep - TODAY!" for n in sent)
    assert all(n["status"] == "SIMULATED" for n in sent)


def test_failed_send_does_not_stop_the_cycle(missions, mock_db):
    register(mock_db, "m-soon", "broken@example.com")
    register(mock_db, "m-soon", "ok@example.com")

    class FlakySender:
        def __init__(self):
            self.delivered = []

        def send(self, recipient, subject, body, channel="email", context=None):
            if recipient.startswith("broken"):
                raise ConnectionError("smtp down")
            self.delivered.append(recipient)

    sender = FlakySender()
    summary = send_mission_reminders(today=TODAY, lookahead_days=3, missions=missions, sender=sender)

    assert summary["sent"] == 1
    assert summary["failed"] == 1
    assert sender.delivered == ["ok@example.com"]


def test_dry_run_sends_nothing(missions, mock_db):
    register(mock_db, "m-today", "a@example.com")

    summary = send_mission_reminders(today=TODAY, lookahead_days=3, missions=missions, dry_run=True)

    assert summary["sent"] == 0
    assert mock_db.collection("notifications").get() == []


def test_participant_without_email_is_counted_as_failed(missions, mock_db):
    register(mock_db, "m-today", None)

    summary = send_mission_reminders(today=TODAY, lookahead_days=3, missions=missions,
                                     sender=NotificationSender(db=mock_db))

    assert summary["failed"] == 1


def test_send_requires_recipient(mock_db):
    with pytest.raises(ValueError):
        NotificationSender(db=mock_db).send("", "subject", "body")


def test_duplicate_join_via_service(missions):
    missions.join_mission("m-soon", "Asha", "asha@example.com")
    with pytest.raises(InvalidInputError):
        missions.join_mission("m-soon", "Asha again", " asha@example.com ")
