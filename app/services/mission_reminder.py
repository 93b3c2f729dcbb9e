"""
Mission Reminder job - "don't forget" messages for upcoming cleanup missions.

Runs once a day (scripts/send_mission_reminders.py, scheduled by cron at
08:00 Asia/Kolkata). For every mission dated within the lookahead window,
each registered participant gets one reminder through the Notification
Sender. A failed send is logged and skipped; it never stops the cycle.
"""

from datetime import date, datetime
from typing import Dict, Optional
from zoneinfo import ZoneInfo
import logging

from app.core.settings import settings
from app.services.mission_service import MissionService, get_mission_service
from app.services.notification_service import NotificationSender, get_notification_sender

logger = logging.getLogger(__name__)

REMINDER_TIMEZONE = "Asia/Kolkata"


def local_today() -> date:
    return datetime.now(ZoneInfo(REMINDER_TIMEZONE)).date()


def days_until(mission_date, today: date) -> int:
    if isinstance(mission_date, str):
        mission_date = date.fromisoformat(mission_date[:10])
    elif isinstance(mission_date, datetime):
        mission_date = mission_date.date()
    return (mission_date - today).days


def urgency_label(days_left: int) -> str:
    if days_left == 0:
        return "TODAY!"
    if days_left == 1:
        return "Tomorrow!"
    return f"In {days_left} days"


def build_reminder_subject(title: str, days_left: int) -> str:
    return f"Mission Reminder: {title} - {urgency_label(days_left)}"


def build_reminder_body(name: str, mission: Dict, days_left: int) -> str:
    mission_date = date.fromisoformat(str(mission.get("date"))[:10])
    lines = [
        f"Hey {name or 'there'}!",
        "",
        "Just a friendly reminder about the mission you signed up for.",
        "",
        f"Mission:  {mission.get('title')} ({urgency_label(days_left)})",
        f"Date:     {mission_date.strftime('%A, %d %B %Y')}",
        f"Location: {mission.get('location') or 'To be announced'}",
        "Report time: 8:00 AM (arrive 15 min early)",
        "",
        "Bring comfortable clothes, closed-toe shoes, a water bottle and sunscreen.",
        "Gloves are provided on-site.",
        "",
        f"See you there! - {settings.NOTIFICATION_SENDER_NAME}",
    ]
    return "\n".join(lines)


def send_mission_reminders(
    today: Optional[date] = None,
    lookahead_days: Optional[int] = None,
    missions: Optional[MissionService] = None,
    sender: Optional[NotificationSender] = None,
    dry_run: bool = False,
) -> Dict:
    """
    Send reminders for missions in [today, today + lookahead_days].

    Returns:
        Summary dict: missions, sent, failed, skipped_missions
    """
    today = today or local_today()
    lookahead_days = settings.REMINDER_LOOKAHEAD_DAYS if lookahead_days is None else lookahead_days
    missions = missions or get_mission_service()
    if not dry_run:
        sender = sender or get_notification_sender()

    summary = {"missions": 0, "sent": 0, "failed": 0, "skipped_missions": 0}

    upcoming = missions.list_upcoming(today, lookahead_days)
    logger.info(f"⏰ Reminder check for {today.isoformat()} (+{lookahead_days} days): {len(upcoming)} mission(s)")
    summary["missions"] = len(upcoming)

    for mission in upcoming:
        participants = missions.list_participants(mission["id"])
        if not participants:
            logger.info(f"No participants for '{mission.get('title')}'")
            summary["skipped_missions"] += 1
            continue

        days_left = days_until(mission["date"], today)
        subject = build_reminder_subject(mission.get("title", "Cleanup mission"), days_left)

        for participant in participants:
            email = participant.get("email")
            body = build_reminder_body(participant.get("name"), mission, days_left)
            if dry_run:
                logger.info(f"[DRY RUN] would send '{subject}' to {email}")
                continue
            try:
                sender.send(email, subject, body, context={"mission_id": mission["id"], "days_left": days_left})
                summary["sent"] += 1
            except Exception as e:
                logger.warning(f"⚠️ Failed to send reminder to {email}: {e}")
                summary["failed"] += 1

    logger.info(f"✅ Reminder cycle complete: {summary}")
    return summary
