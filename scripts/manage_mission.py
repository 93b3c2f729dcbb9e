"""
Cleanup mission administration from the command line.

Usage:
  python scripts/manage_mission.py create "Baga Beach Sweep" 2026-11-08 --location "Baga Beach" [--trees 0]
  python scripts/manage_mission.py delete <mission_id>
  python scripts/manage_mission.py participants <mission_id>
  python scripts/manage_mission.py list
"""

import argparse
from datetime import date

from pydantic import ValidationError

from app.core.errors import EcoGuardError
from app.models.mission import MissionCreate
from app.services.mission_service import get_mission_service


def main():
    parser = argparse.ArgumentParser()
    sub = parser.add_subparsers(dest="command", required=True)

    create_cmd = sub.add_parser("create")
    create_cmd.add_argument("title")
    create_cmd.add_argument("date", type=date.fromisoformat, help="ISO date, e.g. 2026-11-08")
    create_cmd.add_argument("--location")
    create_cmd.add_argument("--description")
    create_cmd.add_argument("--image")
    create_cmd.add_argument("--trees", type=int, default=0, help="Saplings planted")

    for name in ("delete", "participants"):
        cmd = sub.add_parser(name)
        cmd.add_argument("mission_id")

    sub.add_parser("list")

    args = parser.parse_args()
    service = get_mission_service()

    try:
        if args.command == "create":
            mission = service.create_mission(MissionCreate(
                title=args.title,
                date=args.date,
                location=args.location,
                description=args.description,
                image=args.image,
                trees_planted=args.trees,
            ))
            print(f"Created {mission['id']}: {mission['title']} on {mission['date']}")
        elif args.command == "delete":
            removed = service.delete_mission(args.mission_id)
            print(f"Deleted {args.mission_id} ({removed} registration(s) removed)")
        elif args.command == "participants":
            for registration in service.list_participants(args.mission_id):
                print(f"{registration.get('name') or '-':24}  {registration.get('email') or '-':32}  "
                      f"{registration.get('phone') or ''}")
        else:
            for mission in service.list_missions():
                print(f"{mission['id']}  {mission.get('date')}  {mission.get('title')}")
    except ValidationError as e:
        parser.exit(1, f"invalid_input: {e}\n")
    except EcoGuardError as e:
        parser.exit(1, f"{e.kind}: {e.message}\n")


if __name__ == "__main__":
    main()
