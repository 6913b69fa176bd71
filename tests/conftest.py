"""
Pytest configuration and fixtures for PhysioCare tests.

Every test gets a fresh in-memory store and error bus; the API client is
wired to them through dependency overrides.
"""

import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

# Force local mode before the app reads its settings
os.environ["FIREBASE_CREDENTIALS_PATH"] = ""
os.environ.setdefault("GROQ_API_KEY", "")

from app import dependencies  # noqa: E402
from app.crud.base import StoreContext  # noqa: E402
from app.dependencies import (  # noqa: E402
    get_db_client,
    get_diagnostics_log,
    get_error_bus,
    get_groq_service,
    local_issue_token,
)
from app.main import app  # noqa: E402
from app.services.local_store import LocalStore  # noqa: E402
from app.store.events import PERMISSION_ERROR, DiagnosticsLog, ErrorBus  # noqa: E402
from app.store.policy import AccessPolicy, AuthContext  # noqa: E402
from app.store.writes import WritePipeline  # noqa: E402

ADMIN_UID = "admin-1"
PATIENT_UID = "patient-1"


class FakeGroqService:
    """Stands in for GroqService; records calls and returns a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_json(self, system, prompt, max_tokens=1024, temperature=0.4):
        self.calls.append({"system": system, "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def db():
    return LocalStore()


@pytest.fixture
def bus():
    return ErrorBus()


@pytest.fixture
def captured(bus):
    """Every permission error published on the bus, in order."""
    errors = []
    bus.on(PERMISSION_ERROR, errors.append)
    return errors


@pytest.fixture
def policy():
    return AccessPolicy()


@pytest.fixture
def writes(db, bus, policy):
    return WritePipeline(db, bus, policy)


@pytest.fixture
def store(db, bus, policy, writes):
    return StoreContext(db=db, bus=bus, policy=policy, writes=writes)


@pytest.fixture
def admin():
    return AuthContext(uid=ADMIN_UID, email="admin@clinic.test", display_name="Admin", is_admin=True)


@pytest.fixture
def patient():
    return AuthContext(uid=PATIENT_UID, email="pat@example.com", display_name="Pat")


@pytest.fixture
def diagnostics(bus):
    log = DiagnosticsLog(maxlen=50)
    log.attach(bus)
    return log


@pytest.fixture
def groq():
    return FakeGroqService(reply={"summary": "A short summary."})


@pytest.fixture
def client(db, bus, diagnostics, groq, monkeypatch):
    """API client backed by the per-test store and bus."""
    monkeypatch.setattr(dependencies, "_is_local_mode", True)
    app.dependency_overrides[get_db_client] = lambda: db
    app.dependency_overrides[get_error_bus] = lambda: bus
    app.dependency_overrides[get_diagnostics_log] = lambda: diagnostics
    app.dependency_overrides[get_groq_service] = lambda: groq
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(db):
    """Bearer headers for a uid listed in the admins collection."""
    db.document(f"admins/{ADMIN_UID}").set({"addedOn": datetime(2024, 1, 1, tzinfo=timezone.utc)})
    token = local_issue_token(ADMIN_UID, email="admin@clinic.test", name="Admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def patient_headers():
    token = local_issue_token(PATIENT_UID, email="pat@example.com", name="Pat")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_groq():
    """Factory for fake text-generation services."""
    return FakeGroqService
