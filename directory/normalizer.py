"""Turn loosely-typed profile input into a canonical update record.

Two raw input shapes are recognised: the direct shape sent by the site's own
profile editor (canonical field names) and the Webflow form shape (human form
labels). Both go through the same rules; only the field-name table differs.

Every canonical field of an :class:`UpdateRecord` is tri-state:

* ``UNSET``  - the caller did not send it, the stored value is left alone
* ``None``   - the caller cleared it, the stored field is removed
* a value   - the stored field is replaced
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from adapters.base import DELETE_FIELD

NOT_SPECIFIED = "Not specified"

TEXT_FIELDS: Tuple[str, ...] = (
    "pronouns",
    "location",
    "linkedinUrl",
    "resumeUrl",
    "profilePicture",
    "jobTitle",
    "goals",
    "jobSearchStatus",
    "currentCompany",
)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_PARTIAL_SCHEME_RE = re.compile(r"^(?:https?(?::/{0,2}|/{1,2})|/{1,2})", re.IGNORECASE)


class _Unset:
    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class RawInputShape:
    """Field-name translation table for one kind of inbound payload."""

    name: str
    field_map: Mapping[str, str]
    user_id_key: str
    collection_key: str

    def source_key(self, canonical: str) -> str:
        return self.field_map.get(canonical, canonical)


DIRECT_SHAPE = RawInputShape(
    name="direct",
    field_map={name: name for name in TEXT_FIELDS + ("years_experience", "skills", "isPublic")},
    user_id_key="userId",
    collection_key="collection",
)

WEBFLOW_SHAPE = RawInputShape(
    name="webflow",
    field_map={
        "pronouns": "Preferred pronouns",
        "location": "Location",
        "linkedinUrl": "LinkedIn URL",
        "resumeUrl": "Resume upload",
        "profilePicture": "Profile picture",
        "jobTitle": "Job title",
        "years_experience": "Years of experience",
        "skills": "Skills",
        "goals": "Future goals",
        "jobSearchStatus": "Job search status",
        "currentCompany": "Current company",
        "isPublic": "Public Profile",
    },
    user_id_key="User ID",
    collection_key="Collection",
)


@dataclass
class UpdateRecord:
    pronouns: Any = UNSET
    location: Any = UNSET
    linkedinUrl: Any = UNSET
    resumeUrl: Any = UNSET
    profilePicture: Any = UNSET
    jobTitle: Any = UNSET
    years_experience: Any = UNSET
    skills: Any = UNSET
    goals: Any = UNSET
    jobSearchStatus: Any = UNSET
    currentCompany: Any = UNSET
    isPublic: Any = UNSET

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Yield ``(field, value)`` for every field that is not UNSET."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not UNSET:
                yield f.name, value

    def to_update(self) -> Dict[str, Any]:
        """Partial record for ``ProfileStore.merge_write``; cleared fields become DELETE_FIELD."""
        return {key: (DELETE_FIELD if value is None else value) for key, value in self.items()}

    def apply_to(self, existing: Mapping[str, Any]) -> Dict[str, Any]:
        merged = dict(existing)
        for key, value in self.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        return merged


def unwrap_payload(body: Any) -> Dict[str, Any]:
    """Webhook bodies arrive either as ``{"data": {...}}`` or as the flat object itself."""
    if not isinstance(body, dict):
        return {}
    data = body.get("data")
    if isinstance(data, dict) and data:
        return data
    return body


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == NOT_SPECIFIED or value is False


def _clean_text(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _clean_years(value: Any) -> Any:
    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return int(number) if number.is_integer() else number


def _clean_skills(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        parts = [item if isinstance(item, str) else str(item) for item in value if item is not None]
    elif isinstance(value, str) and value != NOT_SPECIFIED:
        parts = value.split(",")
    else:
        return []
    skills = []
    for part in parts:
        cleaned = part.strip()
        if cleaned and cleaned != NOT_SPECIFIED:
            skills.append(cleaned)
    return skills


def _clean_flag(value: Any) -> bool:
    if value is True:
        return True
    return isinstance(value, str) and value.strip().lower() == "true"


def normalize_linkedin_url(url: str) -> str:
    if _SCHEME_RE.match(url):
        return url
    return "https://" + _PARTIAL_SCHEME_RE.sub("", url, count=1)


def _sanitize(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if value == "" or value == NOT_SPECIFIED:
            return None
        return value
    if isinstance(value, dict) and not value:
        return None
    return value


def normalize(raw: Mapping[str, Any], shape: RawInputShape = DIRECT_SHAPE) -> UpdateRecord:
    """Build an :class:`UpdateRecord` from a raw payload of the given shape.

    Text fields, ``years_experience`` and ``skills`` are always produced (missing
    input clears them); ``isPublic`` is only produced when the payload carries it.
    """
    record = UpdateRecord()

    for name in TEXT_FIELDS:
        setattr(record, name, _clean_text(raw.get(shape.source_key(name))))

    record.years_experience = _clean_years(raw.get(shape.source_key("years_experience")))
    record.skills = _clean_skills(raw.get(shape.source_key("skills")))

    public_key = shape.source_key("isPublic")
    if public_key in raw:
        record.isPublic = _clean_flag(raw[public_key])

    for name, value in list(record.items()):
        setattr(record, name, _sanitize(value))

    if record.linkedinUrl:
        record.linkedinUrl = normalize_linkedin_url(record.linkedinUrl)

    return record
