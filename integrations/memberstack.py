"""Memberstack custom-field updates mirrored into the ``members`` collection."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from adapters.base import ProfileStore
from directory.errors import RemoteServiceError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.memberstack.com/v2"
MEMBERS_COLLECTION = "members"


class MemberstackClient:
    """Thin wrapper around the Memberstack admin REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def update_custom_fields(self, member_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """PATCH the member's custom fields and return the member record Memberstack sends back."""
        if not self._api_key:
            raise RemoteServiceError("MEMBERSTACK_API_KEY is not configured.")

        url = f"{self._base_url}/members/{member_id}"
        try:
            response = self._session.patch(
                url,
                json={"customFields": dict(fields)},
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RemoteServiceError(f"Memberstack update failed for {member_id}: {exc}") from exc

        member = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(member, dict):
            raise RemoteServiceError(f"Memberstack returned no member record for {member_id}.")
        return member


def sync_member(
    client: MemberstackClient,
    store: ProfileStore,
    member_id: str,
    field_updates: Mapping[str, Any],
) -> Dict[str, Any]:
    """Push ``field_updates`` to Memberstack, then merge the returned record into the store.

    A failed store write does not undo the remote update.
    """
    member = client.update_custom_fields(member_id, field_updates)
    store.merge_write(MEMBERS_COLLECTION, member_id, member)
    logger.info("Synced member %s (%d custom fields)", member_id, len(field_updates))
    return member
