from __future__ import annotations

from typing import Any, Mapping, Tuple

REQUIRED_FIELDS: Tuple[str, ...] = (
    "pronouns",
    "location",
    "linkedinUrl",
    "resumeUrl",
    "profilePicture",
    "jobTitle",
    "years_experience",
    "skills",
    "goals",
    "jobSearchStatus",
    "currentCompany",
)


def is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return True


def completeness(profile: Mapping[str, Any]) -> int:
    """Percentage (0-100) of REQUIRED_FIELDS that carry a value, rounded half up."""
    filled = sum(1 for name in REQUIRED_FIELDS if is_filled(profile.get(name)))
    return int(filled * 100 / len(REQUIRED_FIELDS) + 0.5)
