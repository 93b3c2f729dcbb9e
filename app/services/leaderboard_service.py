"""
Leaderboard service - community impact totals and top volunteers.

SCORING (per participant, keyed by lowercased email):
- 10 points per mission joined
- 5 points per wildlife sighting
- 5 points per eco-story

Contributions without an email cannot be attributed and only count toward
the totals. Ties are broken by name so the board is stable between calls.
"""

from typing import Dict, Iterable, Optional
import logging

from app.services.mission_service import MissionService, get_mission_service
from app.services.report_store import ReportStore, get_report_store
from app.services.sighting_service import SightingService, get_sighting_service
from app.services.story_service import StoryService, get_story_service

logger = logging.getLogger(__name__)

MISSION_POINTS = 10
SIGHTING_POINTS = 5
STORY_POINTS = 5
PODIUM_SIZE = 3


def _credit(board: Dict[str, Dict], email: Optional[str], name: Optional[str], field: str, points: int):
    email = (email or "").strip().lower()
    if not email:
        return
    entry = board.setdefault(email, {
        "name": name or email.split("@")[0],
        "score": 0,
        "missions_joined": 0,
        "sightings": 0,
        "stories": 0,
    })
    if name and entry["name"] == email.split("@")[0]:
        entry["name"] = name
    entry[field] += 1
    entry["score"] += points


def compute_leaderboard(
    active_reports: Iterable[Dict],
    missions: Iterable[Dict],
    registrations: Iterable[Dict],
    sightings: Iterable[Dict],
    stories: Iterable[Dict] = (),
) -> Dict:
    missions = list(missions)
    sightings = list(sightings)
    board: Dict[str, Dict] = {}

    for registration in registrations:
        _credit(board, registration.get("email"), registration.get("name"), "missions_joined", MISSION_POINTS)
    for sighting in sightings:
        _credit(board, sighting.get("reporter_email"), sighting.get("reporter_name"), "sightings", SIGHTING_POINTS)
    for story in stories:
        _credit(board, story.get("author_email"), story.get("author_name"), "stories", STORY_POINTS)

    ranked = sorted(board.values(), key=lambda entry: (-entry["score"], entry["name"].lower()))

    return {
        "total_reports": sum(1 for _ in active_reports),
        "total_missions": len(missions),
        "total_trees": sum(int(m.get("trees_planted") or 0) for m in missions),
        "total_sightings": len(sightings),
        "top3": ranked[:PODIUM_SIZE],
        "others": ranked[PODIUM_SIZE:],
    }


def get_leaderboard(
    reports: Optional[ReportStore] = None,
    missions: Optional[MissionService] = None,
    sightings: Optional[SightingService] = None,
    stories: Optional[StoryService] = None,
) -> Dict:
    reports = reports or get_report_store()
    missions = missions or get_mission_service()
    sightings = sightings or get_sighting_service()
    stories = stories or get_story_service()

    board = compute_leaderboard(
        reports.list_active(),
        missions.list_missions(),
        missions.list_registrations(),
        sightings.list_sightings(),
        stories.list_all(),
    )
    logger.info(f"🏆 Leaderboard: {len(board['top3']) + len(board['others'])} ranked volunteer(s)")
    return board
