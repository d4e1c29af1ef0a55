from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class _DeleteField:
    """Marker value telling ``merge_write`` to drop a field from the stored document."""

    _instance: Optional["_DeleteField"] = None

    def __new__(cls) -> "_DeleteField":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD = _DeleteField()


class ProfileStore(Protocol):
    """Common contract for document backends holding mentee/mentor/member profiles."""

    def list_all(self, collection: str) -> List[Dict[str, Any]]:
        ...

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    def merge_write(self, collection: str, doc_id: str, partial: Dict[str, Any]) -> None:
        ...
