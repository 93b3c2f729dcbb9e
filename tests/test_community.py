from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.errors import NotFoundError
from app.models.mission import MissionCreate
from app.services.leaderboard_service import compute_leaderboard
from app.services.mission_service import MissionService

SIGHTING = {
    "species_name": "Olive Ridley Turtle",
    "description": "Nesting female",
    "latitude": 15.6167,
    "longitude": 73.7333,
    "location": "Morjim Beach",
    "reporter_name": "Asha Naik",
    "reporter_email": "Asha@Example.com",
}


def seed_story(mock_db, doc_id, minutes_ago, **fields):
    data = {
        "title": f"Story {doc_id}",
        "likes_count": 0,
        "created_at": datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    }
    data.update(fields)
    mock_db.collection("eco_stories").document(doc_id).set(data)


# ---------- sightings ----------

def test_submit_and_list_sightings(client):
    resp = client.post("/api/sightings", json=SIGHTING)

    assert resp.status_code == 201
    created = resp.json()
    assert created["species_name"] == "Olive Ridley Turtle"
    assert "reporter_email" not in created

    listed = client.get("/api/sightings").json()
    assert [s["id"] for s in listed] == [created["id"]]


def test_sightings_are_newest_first(client, mock_db):
    now = datetime.now(timezone.utc)
    for doc_id, hours in (("old", 5), ("new", 1)):
        mock_db.collection("eco_sightings").document(doc_id).set(
            {**SIGHTING, "created_at": now - timedelta(hours=hours)}
        )

    assert [s["id"] for s in client.get("/api/sightings").json()] == ["new", "old"]


def test_sighting_requires_species_and_coordinates(client):
    resp = client.post("/api/sightings", json={"species_name": "  ", "location": "Morjim"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_input"
    assert resp.json()["fields"] == ["species_name", "latitude", "longitude"]


def test_sighting_coordinates_are_range_checked(client):
    resp = client.post("/api/sightings", json={**SIGHTING, "longitude": 181})
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"


# ---------- stories ----------

def test_story_feed_is_paged_newest_first(client, mock_db):
    for i in range(5):
        seed_story(mock_db, f"s{i}", minutes_ago=i)

    first = client.get("/api/stories", params={"page": 1, "limit": 2}).json()
    last = client.get("/api/stories", params={"page": 3, "limit": 2}).json()

    assert [s["id"] for s in first["stories"]] == ["s0", "s1"]
    assert first["total"] == 5
    assert first["total_pages"] == 3
    assert [s["id"] for s in last["stories"]] == ["s4"]


def test_empty_story_feed(client):
    assert client.get("/api/stories").json() == {"stories": [], "total": 0, "page": 1, "total_pages": 0}


def test_create_story(client, mock_db):
    mock_db.collection("missions").document("m1").set({"title": "Baga Sweep", "date": "2026-10-25"})

    resp = client.post("/api/stories", json={"title": "Baga after the sweep", "mission_id": "m1"})

    assert resp.status_code == 201
    assert resp.json()["likes_count"] == 0
    assert resp.json()["mission_id"] == "m1"


def test_story_for_unknown_mission_is_rejected(client):
    resp = client.post("/api/stories", json={"title": "Lost", "mission_id": "nope"})
    assert resp.status_code == 404


def test_blank_story_title_is_rejected(client):
    resp = client.post("/api/stories", json={"title": "   "})
    assert resp.status_code == 400
    assert resp.json()["fields"] == ["title"]


def test_like_story(client, mock_db):
    seed_story(mock_db, "s1", minutes_ago=1, likes_count=2)

    assert client.post("/api/stories/s1/like").json() == {"success": True, "likes_count": 3}
    assert client.post("/api/stories/s1/like").json()["likes_count"] == 4


def test_like_unknown_story(client):
    resp = client.post("/api/stories/nope/like")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


# ---------- leaderboard ----------

def test_compute_leaderboard_scores_and_totals():
    registrations = [
        {"email": "asha@example.com", "name": "Asha"},
        {"email": "ASHA@example.com", "name": "Asha"},
        {"email": "ravi@example.com", "name": "Ravi"},
        {"email": None, "name": "Anonymous"},
    ]
    sightings = [
        {"reporter_email": "ravi@example.com", "reporter_name": "Ravi"},
        {"reporter_email": "ravi@example.com", "reporter_name": "Ravi"},
        {"reporter_email": "meera@example.com", "reporter_name": "Meera"},
        {"reporter_email": None},
    ]
    stories = [{"author_email": "zoe@example.com", "author_name": "Zoe"}]
    missions = [{"trees_planted": 200}, {"trees_planted": None}, {}]

    board = compute_leaderboard([{}, {}], missions, registrations, sightings, stories)

    assert board["total_reports"] == 2
    assert board["total_missions"] == 3
    assert board["total_trees"] == 200
    assert board["total_sightings"] == 4
    assert [(e["name"], e["score"]) for e in board["top3"]] == [("Asha", 20), ("Ravi", 20), ("Meera", 5)]
    assert [e["name"] for e in board["others"]] == ["Zoe"]
    assert board["top3"][1]["sightings"] == 2


def test_leaderboard_endpoint(client, mock_db, seed_report):
    seed_report("r1")
    seed_report("gone", deleted_at=datetime.now(timezone.utc))
    mock_db.collection("missions").document("m1").set(
        {"title": "Mangroves", "date": "2026-11-02", "trees_planted": 150}
    )
    mock_db.collection("mission_registrations").document("reg1").set(
        {"mission_id": "m1", "name": "Asha", "email": "asha@example.com"}
    )
    client.post("/api/sightings", json=SIGHTING)

    body = client.get("/api/leaderboard").json()

    assert body["total_reports"] == 1
    assert body["total_trees"] == 150
    assert body["top3"] == [
        {"name": "Asha", "score": 15, "missions_joined": 1, "sightings": 1, "stories": 0}
    ]
    assert body["others"] == []


# ---------- mission administration ----------

def test_create_and_delete_mission(mock_db):
    service = MissionService(db=mock_db)
    mission = service.create_mission(MissionCreate(
        title=" Chapora Sweep ", date=date(2026, 11, 8), location="Chapora", trees_planted=20,
    ))

    assert mission["title"] == "Chapora Sweep"
    assert service.get_mission(mission["id"])["date"] == "2026-11-08"

    service.join_mission(mission["id"], "Asha", "asha@example.com")
    service.join_mission(mission["id"], "Ravi", "ravi@example.com")

    assert service.delete_mission(mission["id"]) == 2
    assert service.list_participants(mission["id"]) == []
    with pytest.raises(NotFoundError):
        service.get_mission(mission["id"])


def test_created_mission_is_listed(client, mock_db):
    MissionService(db=mock_db).create_mission(MissionCreate(title="Baga Sweep", date=date(2026, 11, 1)))

    missions = client.get("/api/missions").json()

    assert [m["title"] for m in missions] == ["Baga Sweep"]
    assert missions[0]["trees_planted"] == 0


def test_delete_unknown_mission(mock_db):
    with pytest.raises(NotFoundError):
        MissionService(db=mock_db).delete_mission("nope")
