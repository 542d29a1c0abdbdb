from __future__ import annotations

import copy
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from employee_directory_api.app.core.config import Settings
from employee_directory_api.app.core.exceptions import ConflictError
from employee_directory_api.app.main import create_app
from employee_directory_api.app.services.account_service import AccountService
from employee_directory_api.app.services.employee_service import DUPLICATE_MESSAGE, EmployeeService


class FakeCollection:
    """In-memory DocumentCollection that records every call."""

    def __init__(self, conflict_message="Duplicate email"):
        self.conflict_message = conflict_message
        self.docs: dict[str, dict] = {}
        self.calls: list[str] = []

    async def find_one(self, filter):
        self.calls.append("find_one")
        matches = self._match(filter)
        return matches[0] if matches else None

    async def find_by_id(self, document_id):
        self.calls.append("find_by_id")
        doc = self.docs.get(document_id)
        return copy.deepcopy(doc) if doc else None

    async def find(self, filter=None):
        self.calls.append("find")
        return self._match(filter or {})

    async def save(self, document):
        self.calls.append("save")
        stored = copy.deepcopy(document)
        stored.setdefault("id", uuid.uuid4().hex)
        for other_id, other in self.docs.items():
            if other_id != stored["id"] and other.get("email") == stored.get("email"):
                raise ConflictError(self.conflict_message)
        self.docs[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def delete_by_id(self, document_id):
        self.calls.append("delete_by_id")
        return self.docs.pop(document_id, None) is not None

    def _match(self, filter):
        return [
            copy.deepcopy(doc)
            for doc in self.docs.values()
            if all(doc.get(key) == value for key, value in filter.items())
        ]


class StepClock:
    """Clock that moves forward one second per call."""

    def __init__(self, start=datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_key="test-secret",
        database_url=str(tmp_path / "test.db"),
        password_hash_iterations=1000,
        employee_auth_required=False,
    )


@pytest.fixture
def accounts():
    return FakeCollection(conflict_message="Email already in use")


@pytest.fixture
def employees():
    return FakeCollection(conflict_message=DUPLICATE_MESSAGE)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def account_service(accounts, settings):
    return AccountService(accounts, settings)


@pytest.fixture
def employee_service(employees, clock):
    return EmployeeService(employees, clock=clock)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def employee_payload(**overrides):
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "gender": "Female",
        "designation": "Engineer",
        "salary": 5000,
        "date_of_joining": "2024-03-01",
        "department": "Eng",
    }
    payload.update(overrides)
    return payload
