"""Load the sample mentee/mentor profiles into MongoDB."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.memory_adapter import MemoryProfileStore  # noqa: E402
from adapters.mongo_adapter import MongoProfileStore  # noqa: E402
from directory.completeness import completeness  # noqa: E402

DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    load_dotenv(DOTENV_PATH)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample directory profiles into MongoDB.")
    parser.add_argument("--force", action="store_true", help="Clear each collection before seeding.")
    args = parser.parse_args()

    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise SystemExit("MONGO_URI is not defined; update .env before running.")

    store = MongoProfileStore(mongo_uri, db_name=os.getenv("MONGO_DB", "mentorship"))
    try:
        for collection, profiles in MemoryProfileStore.SAMPLE_PROFILES.items():
            if args.force:
                removed = store.delete_all(collection)
                print(f"[OK] Cleared {removed} documents from {collection}.")
            for profile in profiles:
                doc = {key: value for key, value in profile.items() if key != "id"}
                doc["completeness"] = completeness(doc)
                store.merge_write(collection, profile["id"], doc)
                print(f"[OK] Seeded {collection}/{profile['id']}.")
    finally:
        store.close()
    print("Done.")


if __name__ == "__main__":
    main()
