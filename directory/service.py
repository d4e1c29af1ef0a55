"""Profile read/write pipeline shared by the HTTP routes.

Writes: raw payload -> normalize -> merge with the stored document ->
completeness -> merge-write. Reads: full collection snapshot -> filter engine.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from adapters.base import ProfileStore

from .completeness import completeness
from .errors import ValidationError
from .filters import FilterSpec, filter_profiles
from .normalizer import DIRECT_SHAPE, RawInputShape, UpdateRecord, normalize

logger = logging.getLogger(__name__)

PROFILE_COLLECTIONS = ("mentees", "mentors")
DEFAULT_COLLECTION = "mentees"


def resolve_profile_collection(value: Any) -> str:
    """Writes only target mentees or mentors; anything else falls back to mentees."""
    return value if value in PROFILE_COLLECTIONS else DEFAULT_COLLECTION


class ProfileService:
    """Directory reads and profile merge-writes against a single store instance."""

    def __init__(self, store: ProfileStore) -> None:
        self._store = store

    def directory(self, collection: Optional[str], query: FilterSpec) -> List[Dict[str, Any]]:
        collection = collection or DEFAULT_COLLECTION
        documents = self._store.list_all(collection)
        logger.info("Store returned %d documents from %s", len(documents), collection)
        users = filter_profiles(documents, query)
        logger.info("Filtered users count: %d", len(users))
        return users

    def update_profile(self, user_id: str, record: UpdateRecord, collection: str = DEFAULT_COLLECTION) -> Dict[str, Any]:
        """Merge ``record`` into the stored profile and return the resulting profile."""
        if not user_id:
            raise ValidationError("A user id is required.")

        existing = self._store.get_by_id(collection, user_id) or {}
        merged = record.apply_to(existing)
        merged.pop("id", None)
        merged["completeness"] = completeness(merged)

        update = record.to_update()
        update["completeness"] = merged["completeness"]
        self._store.merge_write(collection, user_id, update)

        return {"id": user_id, **merged}

    def update_from_payload(
        self,
        user_id: str,
        raw: Mapping[str, Any],
        shape: RawInputShape = DIRECT_SHAPE,
    ) -> Tuple[str, Dict[str, Any]]:
        """Normalize a raw payload and write it; returns the target collection and the profile."""
        collection = resolve_profile_collection(raw.get(shape.collection_key))
        record = normalize(raw, shape)
        return collection, self.update_profile(user_id, record, collection)
