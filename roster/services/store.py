"""Student record store backed by a SQLAlchemy session."""

import logging
from collections.abc import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roster.models.student import Student
from roster.schemas.student import StudentBase

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE and MySQL error number for unique violations
PG_UNIQUE_VIOLATION = "23505"
MYSQL_DUP_ENTRY = 1062


class StoreError(Exception):
    """The store failed to execute a statement."""


class DuplicateKeyError(StoreError):
    """A write would violate the unique student_id constraint."""


def is_duplicate_key(exc: IntegrityError) -> bool:
    """Tell unique violations apart from other integrity errors."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == PG_UNIQUE_VIOLATION
    args = getattr(orig, "args", ())
    if args and args[0] == MYSQL_DUP_ENTRY:
        return True
    return "UNIQUE constraint failed" in str(orig)


class StudentStore:
    """
    Insert, update, delete and select student rows.

    Each write is a single statement committed on success and rolled back
    on failure. Uniqueness of student_id is left to the database.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert_many(self, records: Sequence[StudentBase]) -> None:
        """Insert all records with one statement."""
        self._write(
            "insert",
            insert(Student),
            [record.model_dump() for record in records],
        )

    def update_one(self, id: int, record: StudentBase) -> int:
        """Overwrite every roster field of one row; returns rows affected."""
        result = self._write(
            "update",
            update(Student).where(Student.id == id).values(**record.model_dump()),
        )
        return result.rowcount

    def delete_one(self, id: int) -> int:
        """Delete one row; returns rows affected."""
        result = self._write("delete", delete(Student).where(Student.id == id))
        return result.rowcount

    def select_all(self) -> list[Student]:
        try:
            result = self.db.execute(select(Student).order_by(Student.id))
        except SQLAlchemyError as e:
            logger.error(f"[STORE] select failed: {e}")
            raise StoreError(str(e)) from e
        return list(result.scalars().all())

    def get(self, id: int) -> Student | None:
        try:
            return self.db.get(Student, id, populate_existing=True)
        except SQLAlchemyError as e:
            logger.error(f"[STORE] get failed for id={id}: {e}")
            raise StoreError(str(e)) from e

    def _write(self, operation: str, statement, params=None):
        try:
            if params is None:
                result = self.db.execute(statement)
            else:
                result = self.db.execute(statement, params)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_duplicate_key(e):
                logger.warning(f"[STORE] {operation} rejected, duplicate student_id: {e.orig}")
                raise DuplicateKeyError(str(e.orig)) from e
            logger.error(f"[STORE] {operation} failed: {e}")
            raise StoreError(str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[STORE] {operation} failed: {e}")
            raise StoreError(str(e)) from e
        return result
