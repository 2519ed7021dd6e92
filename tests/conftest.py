import os

# Point the app at SQLite before any roster module reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Generator
from io import BytesIO
from typing import Any

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from roster.core.database import Base, get_db
from roster.main import app
from roster.models import Student
from roster.services.store import DuplicateKeyError, StoreError, StudentStore

HEADERS = ["student_id", "student_name", "grade_name", "class_name", "phone", "email"]


def student_row(student_id: str = "A123", **overrides: Any) -> dict[str, Any]:
    """A row that passes every field rule."""
    row = {
        "student_id": student_id,
        "student_name": "Jane Doe",
        "grade_name": "10",
        "class_name": "A",
        "phone": "123456789",
        "email": "jane@example.com",
    }
    row.update(overrides)
    return row


def make_workbook(rows: list[list[Any]], headers: list[str] | None = None) -> bytes:
    """Build an .xlsx file in memory; the header row comes first."""
    wb = Workbook()
    ws = wb.active
    ws.append(HEADERS if headers is None else headers)
    for row in rows:
        ws.append(row)
    output = BytesIO()
    wb.save(output)
    return output.getvalue()


class RecordingStore:
    """Store stub that records calls and can be told to fail."""

    def __init__(self, error: Exception | None = None, rowcount: int = 1):
        self.error = error
        self.rowcount = rowcount
        self.inserted: list[list] = []
        self.updated: list[tuple] = []
        self.deleted: list[int] = []

    def insert_many(self, records):
        if self.error:
            raise self.error
        self.inserted.append(list(records))

    def update_one(self, id, record):
        if self.error:
            raise self.error
        self.updated.append((id, record))
        return self.rowcount

    def delete_one(self, id):
        if self.error:
            raise self.error
        self.deleted.append(id)
        return self.rowcount

    def select_all(self):
        return []

    def get(self, id):
        return None

    @property
    def write_count(self) -> int:
        return len(self.inserted) + len(self.updated) + len(self.deleted)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session: Session) -> StudentStore:
    return StudentStore(db_session)


@pytest.fixture
def stored_students(db_session: Session) -> list[Student]:
    """Two committed students."""
    students = [
        Student(**student_row("A123")),
        Student(**student_row("B456", student_name="John Roe", email="john@example.com")),
    ]
    db_session.add_all(students)
    db_session.commit()
    return students


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def duplicate_store() -> RecordingStore:
    return RecordingStore(error=DuplicateKeyError("UNIQUE constraint failed: students.student_id"))


@pytest.fixture
def broken_store() -> RecordingStore:
    return RecordingStore(error=StoreError("connection lost"))
