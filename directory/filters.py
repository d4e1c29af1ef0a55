from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .completeness import REQUIRED_FIELDS
from .normalizer import NOT_SPECIFIED

TRUTHY = {"1", "true", "yes", "on"}

# Ranges are inclusive; None means unbounded.
EXPERIENCE_RANGES: Dict[str, tuple] = {
    "0-1": (0, 1),
    "2-3": (2, 3),
    "4+": (4, None),
}


@dataclass
class FilterSpec:
    """Predicates for a directory read. Empty lists and a blank search are no-ops."""

    admin: bool = False
    skills: List[str] = field(default_factory=list)
    availability: List[str] = field(default_factory=list)
    role: List[str] = field(default_factory=list)
    timezone: List[str] = field(default_factory=list)
    team: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    industry: List[str] = field(default_factory=list)
    experience: List[str] = field(default_factory=list)
    search: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "FilterSpec":
        """Build a spec from query parameters (a werkzeug MultiDict or a plain mapping)."""

        def values(name: str, strip: bool = True) -> List[str]:
            if hasattr(args, "getlist"):
                raw = args.getlist(name)
            else:
                raw = args.get(name)
            found = [str(v) for v in _as_list(raw) if v is not None]
            if strip:
                found = [v.strip() for v in found]
            return [v for v in found if v]

        admin_values = values("admin")
        # The search term is matched as sent, surrounding spaces included.
        search_values = values("search", strip=False)
        return cls(
            admin=bool(admin_values) and admin_values[0].lower() in TRUTHY,
            skills=values("skills"),
            availability=values("availability"),
            role=values("role"),
            timezone=values("timezone"),
            team=values("team"),
            education=values("education"),
            industry=values("industry"),
            experience=values("experience"),
            search=search_values[0] if search_values else None,
        )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def apply_display_defaults(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``doc`` with missing required fields shown as NOT_SPECIFIED and isPublic defaulted."""
    user = dict(doc)
    for name in REQUIRED_FIELDS:
        if user.get(name) is None:
            user[name] = NOT_SPECIFIED
    if user.get("isPublic") is None:
        user["isPublic"] = False
    return user


def _lowered(values: Iterable[str]) -> set:
    return {v.lower() for v in values}


def _match_sequence(value: Any, wanted: set, allow_scalar: bool = False) -> bool:
    if isinstance(value, str):
        return allow_scalar and value.lower() in wanted
    if not isinstance(value, (list, tuple)):
        return False
    return any(isinstance(item, str) and item.lower() in wanted for item in value)


def _match_scalar(value: Any, wanted: set) -> bool:
    return isinstance(value, str) and value.lower() in wanted


def _in_experience_range(years: Any, tokens: Iterable[str]) -> bool:
    if isinstance(years, bool) or not isinstance(years, (int, float)):
        return False
    for token in tokens:
        bounds = EXPERIENCE_RANGES.get(token)
        if bounds is None:
            continue
        low, high = bounds
        if years >= low and (high is None or years <= high):
            return True
    return False


def _matches_search(user: Mapping[str, Any], term: str) -> bool:
    for name in ("first_name", "last_name", "industry"):
        value = user.get(name)
        if isinstance(value, str) and term in value.lower():
            return True
    skills = user.get("skills")
    if isinstance(skills, (list, tuple)):
        return any(isinstance(skill, str) and term in skill.lower() for skill in skills)
    return False


def filter_profiles(documents: Iterable[Mapping[str, Any]], query: FilterSpec) -> List[Dict[str, Any]]:
    users = [apply_display_defaults(doc) for doc in documents]

    if not query.admin:
        users = [u for u in users if u.get("isPublic") is True]

    predicates: List[Callable[[Mapping[str, Any]], bool]] = []

    for name in ("skills", "availability"):
        wanted = _lowered(getattr(query, name))
        if wanted:
            predicates.append(lambda u, n=name, w=wanted: _match_sequence(u.get(n), w))

    for name in ("role", "timezone", "team"):
        wanted = _lowered(getattr(query, name))
        if wanted:
            predicates.append(lambda u, n=name, w=wanted: _match_sequence(u.get(n), w, allow_scalar=True))

    for name in ("education", "industry"):
        wanted = _lowered(getattr(query, name))
        if wanted:
            predicates.append(lambda u, n=name, w=wanted: _match_scalar(u.get(n), w))

    if query.experience:
        predicates.append(lambda u: _in_experience_range(u.get("years_experience"), query.experience))

    if query.search:
        term = query.search.lower()
        predicates.append(lambda u: _matches_search(u, term))

    return [u for u in users if all(check(u) for check in predicates)]
