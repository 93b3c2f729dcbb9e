"""
Report maintenance from the command line.

Usage:
  python scripts/manage_report.py soft-delete <report_id>
  python scripts/manage_report.py restore <report_id>
  python scripts/manage_report.py set-status <report_id> approved
  python scripts/manage_report.py list [--include-deleted]
"""

import argparse

from app.core.errors import EcoGuardError
from app.services.report_store import get_report_store


def main():
    parser = argparse.ArgumentParser()
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("soft-delete", "restore"):
        cmd = sub.add_parser(name)
        cmd.add_argument("report_id")

    status_cmd = sub.add_parser("set-status")
    status_cmd.add_argument("report_id")
    status_cmd.add_argument("status", choices=["pending", "approved", "rejected"])

    list_cmd = sub.add_parser("list")
    list_cmd.add_argument("--include-deleted", action="store_true")

    args = parser.parse_args()
    store = get_report_store()

    try:
        if args.command == "list":
            for report in store.list_all(include_deleted=args.include_deleted):
                deleted = " [deleted]" if report.get("deleted_at") else ""
                print(f"{report['id']}  {report.get('severity', '?'):8}  {report.get('status', '?'):8}  "
                      f"{report.get('location') or '-'}{deleted}")
            return
        if args.command == "soft-delete":
            report = store.soft_delete(args.report_id)
        elif args.command == "restore":
            report = store.restore(args.report_id)
        else:
            report = store.set_status(args.report_id, args.status)
    except EcoGuardError as e:
        parser.exit(1, f"{e.kind}: {e.message}\n")

    print(f"{report['id']}: status={report.get('status')} deleted_at={report.get('deleted_at')}")


if __name__ == "__main__":
    main()
