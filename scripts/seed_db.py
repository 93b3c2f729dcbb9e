"""
Seed script for the Goa Eco-Guard mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Force mock DB even if FIREBASE configured: python scripts/seed_db.py --apply --force-mock

Behavior:
  - Loads `db_seed.json` from repo root ({collection: {doc_id: data}}).
  - ISO timestamps in created_at / deleted_at are written as datetimes.
  - Report severities are normalized the same way submissions are.

NOTE: When applying to real Firestore, ensure `FIREBASE_CREDENTIALS_PATH` and `USE_MOCK_DB=false` are set in `.env`.
"""

import argparse
import json
import os
from typing import Any

from app.config.firebase import get_db
from app.core.settings import settings
from app.services.severity import normalize_severity
from app.utils.timestamps import parse_timestamp

TIMESTAMP_FIELDS = ("created_at", "deleted_at")


def load_seed(path: str = "./db_seed.json") -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def prepare_document(collection: str, data: dict) -> dict:
    doc = dict(data)
    for field in TIMESTAMP_FIELDS:
        if isinstance(doc.get(field), str):
            doc[field] = parse_timestamp(doc[field])
    if collection == settings.REPORTS_COLLECTION:
        doc["severity"] = normalize_severity(doc.get("severity"))
        doc.setdefault("deleted_at", None)
        doc.setdefault("status", "pending")
    return doc


def write_to_db(db: Any, seed: dict, apply: bool = False):
    for collection, docs in seed.items():
        for doc_id, data in docs.items():
            print(f"Preparing: {collection}/{doc_id}")
            if not apply:
                continue
            try:
                db.collection(collection).document(doc_id).set(prepare_document(collection, data))
                print(f"Wrote: {collection}/{doc_id}")
            except Exception as e:
                print(f"Failed to write {collection}/{doc_id}: {e}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if FIREBASE configured")
    parser.add_argument("--seed", default=os.path.join(os.getcwd(), "db_seed.json"), help="Seed file path")
    args = parser.parse_args()

    if not os.path.exists(args.seed):
        print(f"Seed file not found: {args.seed}")
        return

    seed = load_seed(args.seed)

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True

    db = get_db()

    write_to_db(db, seed, apply=args.apply)

    if args.apply:
        print("Seeding completed.")
    else:
        print("Dry run complete. Re-run with --apply to write to DB.")


if __name__ == "__main__":
    main()
