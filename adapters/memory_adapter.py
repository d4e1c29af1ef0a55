from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional

from .base import DELETE_FIELD, ProfileStore


class MemoryProfileStore(ProfileStore):
    """In-process profile store for demo mode and tests. Nothing survives a restart."""

    SAMPLE_PROFILES: Dict[str, List[Dict[str, Any]]] = {
        "mentees": [
            {
                "id": "m_ava",
                "first_name": "Ava",
                "last_name": "Nguyen",
                "pronouns": "she/her",
                "location": "Austin, TX",
                "linkedinUrl": "https://linkedin.com/in/ava-nguyen",
                "jobTitle": "Junior Data Analyst",
                "years_experience": 1,
                "skills": ["Python", "SQL", "Tableau"],
                "availability": ["Weekday evenings"],
                "industry": "Healthcare",
                "education": "Bachelor's",
                "timezone": "CST",
                "goals": "Move into data engineering",
                "jobSearchStatus": "Actively looking",
                "isPublic": True,
            },
            {
                "id": "m_liam",
                "first_name": "Liam",
                "last_name": "Okafor",
                "location": "Remote",
                "jobTitle": "Support Engineer",
                "years_experience": 3,
                "skills": ["JavaScript", "Customer Success"],
                "availability": ["Weekends"],
                "industry": "SaaS",
                "education": "Bootcamp",
                "timezone": "EST",
                "isPublic": True,
            },
            {
                "id": "m_priya",
                "first_name": "Priya",
                "last_name": "Raman",
                "skills": ["Product Management"],
                "industry": "Fintech",
                "isPublic": False,
            },
        ],
        "mentors": [
            {
                "id": "r_marcus",
                "first_name": "Marcus",
                "last_name": "Hale",
                "pronouns": "he/him",
                "location": "Seattle, WA",
                "jobTitle": "Staff Engineer",
                "currentCompany": "Northwind",
                "years_experience": 12,
                "skills": ["Python", "Distributed Systems", "Engineering Leadership"],
                "availability": ["Weekday mornings"],
                "industry": "Cloud",
                "role": "mentor",
                "team": "Platform",
                "timezone": "PST",
                "isPublic": True,
            },
            {
                "id": "r_sofia",
                "first_name": "Sofia",
                "last_name": "Marin",
                "jobTitle": "Design Lead",
                "years_experience": 7,
                "skills": ["UX Research", "Figma"],
                "industry": "Retail",
                "role": "mentor",
                "timezone": "CET",
            },
        ],
        "members": [],
    }

    def __init__(self, seed: bool = False) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if seed:
            self.seed_if_empty()

    def seed_if_empty(self) -> None:
        if self._collections:
            return
        for collection, profiles in self.SAMPLE_PROFILES.items():
            bucket = self._collections.setdefault(collection, {})
            for profile in profiles:
                doc = deepcopy(profile)
                bucket[doc.pop("id")] = doc

    def list_all(self, collection: str) -> List[Dict[str, Any]]:
        bucket = self._collections.get(collection, {})
        return [{"id": doc_id, **deepcopy(doc)} for doc_id, doc in bucket.items()]

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            return None
        return {"id": doc_id, **deepcopy(doc)}

    def merge_write(self, collection: str, doc_id: str, partial: Dict[str, Any]) -> None:
        doc = self._collections.setdefault(collection, {}).setdefault(doc_id, {})
        for key, value in partial.items():
            if key == "id":
                continue
            if value is DELETE_FIELD:
                doc.pop(key, None)
            else:
                doc[key] = deepcopy(value)
