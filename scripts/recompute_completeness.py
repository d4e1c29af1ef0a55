"""Recompute the stored completeness score of every profile in a collection."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.base import ProfileStore  # noqa: E402
from adapters.mongo_adapter import MongoProfileStore  # noqa: E402
from directory.completeness import completeness  # noqa: E402

DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    load_dotenv(DOTENV_PATH)


def recompute(store: ProfileStore, collection: str) -> int:
    """Rewrite ``completeness`` where it is stale; returns the number of documents changed."""
    changed = 0
    for profile in store.list_all(collection):
        score = completeness(profile)
        if profile.get("completeness") == score:
            continue
        store.merge_write(collection, profile["id"], {"completeness": score})
        changed += 1
    return changed


def main() -> None:
    parser = argparse.ArgumentParser(description="Recompute profile completeness scores.")
    parser.add_argument("collection", choices=["mentees", "mentors"], help="Collection to update.")
    args = parser.parse_args()

    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise SystemExit("MONGO_URI is not defined; update .env before running.")

    store = MongoProfileStore(mongo_uri, db_name=os.getenv("MONGO_DB", "mentorship"))
    try:
        changed = recompute(store, args.collection)
    finally:
        store.close()
    print(f"Updated completeness on {changed} {args.collection} profiles.")


if __name__ == "__main__":
    main()
