"""Shared fixtures: in-memory store, fake Memberstack client and a Flask test client."""

import pytest

import app as app_module
from adapters.memory_adapter import MemoryProfileStore
from directory.errors import RemoteServiceError


class FakeMemberstack:
    """Stands in for MemberstackClient.

    Set ``should_fail`` to make the next update raise RemoteServiceError.
    """

    def __init__(self):
        self.calls = []
        self.should_fail = False

    def update_custom_fields(self, member_id, fields):
        self.calls.append((member_id, dict(fields)))
        if self.should_fail:
            raise RemoteServiceError("Mock Memberstack failure")
        return {
            "id": member_id,
            "auth": {"email": f"{member_id}@example.com"},
            "customFields": dict(fields),
        }


@pytest.fixture(autouse=True)
def audit_log(tmp_path, monkeypatch):
    path = tmp_path / "audit.log"
    monkeypatch.setattr(app_module, "LOG_FILE", str(path))
    return path


@pytest.fixture
def store():
    return MemoryProfileStore()


@pytest.fixture
def seeded_store():
    return MemoryProfileStore(seed=True)


@pytest.fixture
def memberstack():
    return FakeMemberstack()


@pytest.fixture
def client(store, memberstack):
    flask_app = app_module.create_app(store=store, memberstack=memberstack)
    flask_app.config["TESTING"] = True
    return flask_app.test_client()


@pytest.fixture
def full_profile():
    return {
        "pronouns": "they/them",
        "location": "Denver, CO",
        "linkedinUrl": "https://linkedin.com/in/sam",
        "resumeUrl": "https://files.example.com/sam.pdf",
        "profilePicture": "https://files.example.com/sam.png",
        "jobTitle": "Backend Engineer",
        "years_experience": 5,
        "skills": ["Python", "Go"],
        "goals": "Mentor new engineers",
        "jobSearchStatus": "Open to offers",
        "currentCompany": "Acme",
    }
