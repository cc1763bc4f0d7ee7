import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from teacher_registry import models
from teacher_registry.database import get_session
from teacher_registry.errors import DuplicateRecordError, RecordNotFoundError, StoreError
from teacher_registry.main import app, get_codec
from teacher_registry.security import PasswordCodec

TEST_ROUNDS = 1000


class FakeTeacherStore:
    """In-memory stand-in for `TeacherRepository` that records every call."""

    def __init__(self):
        self.rows = {}
        self.calls = []

    def create(self, teacher):
        self.calls.append("create")
        if any(r.email == teacher.email for r in self.rows.values()):
            raise DuplicateRecordError()
        row = teacher.model_copy(update={"id": uuid.uuid4()})
        self.rows[row.id] = row
        return row.model_copy()

    def get_by_id(self, teacher_id):
        self.calls.append("get_by_id")
        row = self.rows.get(teacher_id)
        return row.model_copy() if row else None

    def get_by_email(self, email):
        self.calls.append("get_by_email")
        for row in self.rows.values():
            if row.email == email:
                return row.model_copy()
        return None

    def get_all(self):
        self.calls.append("get_all")
        ordered = sorted(self.rows.values(), key=lambda r: (r.full_name == "", r.full_name))
        return [r.model_copy() for r in ordered]

    def update(self, teacher):
        self.calls.append("update")
        existing = self.rows.get(teacher.id)
        if existing is None:
            raise RecordNotFoundError()
        password_hash = teacher.password_hash or existing.password_hash
        row = teacher.model_copy(update={"password_hash": password_hash})
        self.rows[row.id] = row
        return row.model_copy()

    def update_password(self, teacher_id, password_hash):
        self.calls.append("update_password")
        existing = self.rows.get(teacher_id)
        if existing is None:
            raise RecordNotFoundError()
        self.rows[teacher_id] = existing.model_copy(update={"password_hash": password_hash})

    def delete(self, teacher_id):
        self.calls.append("delete")
        if self.rows.pop(teacher_id, None) is None:
            raise RecordNotFoundError()


class BrokenStore:
    """Store whose every operation fails like a dropped connection."""

    def __getattr__(self, name):
        def fail(*_args, **_kwargs):
            raise StoreError()
        return fail


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared across threads."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture(scope="session")
def codec():
    return PasswordCodec(rounds=TEST_ROUNDS)


@pytest.fixture
def fake_store():
    return FakeTeacherStore()


@pytest.fixture
def client(engine, codec):
    """TestClient wired to the in-memory database."""
    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_codec] = lambda: codec
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_teacher(**overrides) -> models.Teacher:
    data = {
        "email": "ada@school.org",
        "full_name": "Ada Lovelace",
        "phone": "+44 20 7946 0000",
        "designation": "Lecturer",
        "qualification": "MSc Mathematics",
        "date_of_birth": date(1985, 12, 10),
    }
    data.update(overrides)
    return models.Teacher(**data)
