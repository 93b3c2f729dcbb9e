"""
Daily mission reminder run.

Usage:
  python scripts/send_mission_reminders.py              # today (Asia/Kolkata)
  python scripts/send_mission_reminders.py --date 2026-10-20 --dry-run

Crontab (08:00 IST = 02:30 UTC):
  30 2 * * * cd /srv/goa-eco-guard && python scripts/send_mission_reminders.py
"""

import argparse
import logging
from datetime import date

from app.core.settings import settings
from app.services.mission_reminder import send_mission_reminders


def main():
    parser = argparse.ArgumentParser(description="Send reminders for upcoming cleanup missions")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Run as if today were this ISO date")
    parser.add_argument("--days", type=int, default=None, help="Lookahead window in days")
    parser.add_argument("--dry-run", action="store_true", help="Log reminders instead of sending them")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    summary = send_mission_reminders(today=args.date, lookahead_days=args.days, dry_run=args.dry_run)
    print(
        f"Missions: {summary['missions']}  Sent: {summary['sent']}  "
        f"Failed: {summary['failed']}  No participants: {summary['skipped_missions']}"
    )


if __name__ == "__main__":
    main()
