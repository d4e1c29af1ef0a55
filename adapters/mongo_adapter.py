from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from directory.errors import StoreError

from .base import DELETE_FIELD, ProfileStore

logger = logging.getLogger(__name__)


class MongoProfileStore(ProfileStore):
    """MongoDB-backed profile store. Each collection maps to a Mongo collection keyed by ``_id``."""

    def __init__(self, mongo_uri: str, db_name: str = "mentorship") -> None:
        if not mongo_uri:
            raise ValueError("mongo_uri is required for MongoProfileStore.")

        self._client = MongoClient(mongo_uri, appname="MentorshipDirectory")
        self._db = self._client[db_name]

    def list_all(self, collection: str) -> List[Dict[str, Any]]:
        try:
            cursor = self._db[collection].find({}).sort("_id", ASCENDING)
            return [self._to_profile(doc) for doc in cursor]
        except PyMongoError as exc:
            raise StoreError(f"Failed to read collection '{collection}': {exc}") from exc

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self._db[collection].find_one({"_id": doc_id})
        except PyMongoError as exc:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {exc}") from exc
        if doc is None:
            return None
        return self._to_profile(doc)

    def merge_write(self, collection: str, doc_id: str, partial: Dict[str, Any]) -> None:
        to_set: Dict[str, Any] = {}
        to_unset: Dict[str, str] = {}
        for key, value in partial.items():
            if key in ("_id", "id"):
                continue
            if value is DELETE_FIELD:
                to_unset[key] = ""
            else:
                to_set[key] = value

        update: Dict[str, Any] = {}
        if to_set:
            update["$set"] = to_set
        if to_unset:
            update["$unset"] = to_unset

        try:
            if update:
                self._db[collection].update_one({"_id": doc_id}, update, upsert=True)
            else:
                # Mongo rejects empty update documents; only make sure the record exists.
                try:
                    self._db[collection].insert_one({"_id": doc_id})
                except DuplicateKeyError:
                    pass
        except PyMongoError as exc:
            raise StoreError(f"Failed to write {collection}/{doc_id}: {exc}") from exc
        logger.debug("merge_write %s/%s set=%s unset=%s", collection, doc_id, sorted(to_set), sorted(to_unset))

    def delete_all(self, collection: str) -> int:
        try:
            result = self._db[collection].delete_many({})
        except PyMongoError as exc:
            raise StoreError(f"Failed to clear collection '{collection}': {exc}") from exc
        return result.deleted_count

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _to_profile(doc: Dict[str, Any]) -> Dict[str, Any]:
        profile: Dict[str, Any] = {"id": str(doc.get("_id"))}
        profile.update((key, value) for key, value in doc.items() if key not in ("_id", "id"))
        return profile
