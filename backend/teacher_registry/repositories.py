"""Repository encapsulating database operations on teachers.

`TeacherStore` is the capability set the service depends on;
`TeacherRepository` implements it on a SQLModel `Session`. The repository
commits its own writes and hands out detached `models.Teacher` records
rather than managed rows.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import List, Optional, Protocol

from sqlalchemy import case, delete, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from . import models
from .errors import DuplicateRecordError, RecordNotFoundError, StoreError

logger = logging.getLogger("teacher_registry.store")

PROFILE_FIELDS = (
    "email",
    "full_name",
    "phone",
    "is_active",
    "photo",
    "date_of_birth",
    "joining_date",
    "gender",
    "bio",
    "address",
    "designation",
    "qualification",
)


class TeacherStore(Protocol):
    """Persistence operations required by `TeacherService`."""

    def create(self, teacher: models.Teacher) -> models.Teacher: ...

    def get_by_id(self, teacher_id: uuid.UUID) -> Optional[models.Teacher]: ...

    def get_by_email(self, email: str) -> Optional[models.Teacher]: ...

    def get_all(self) -> List[models.Teacher]: ...

    def update(self, teacher: models.Teacher) -> models.Teacher: ...

    def update_password(self, teacher_id: uuid.UUID, password_hash: str) -> None: ...

    def delete(self, teacher_id: uuid.UUID) -> None: ...


def _to_record(row: models.TeacherRow) -> models.Teacher:
    return models.Teacher.model_validate(row)


def _is_email_conflict(exc: IntegrityError) -> bool:
    """True if `exc` is the unique constraint on `teachers.email`.

    SQLite reports "UNIQUE constraint failed: teachers.email"; PostgreSQL
    raises SQLSTATE 23505 naming the email index and key.
    """
    message = str(exc.orig).lower()
    unique = (
        getattr(exc.orig, "pgcode", None) == "23505"
        or "unique constraint" in message
        or "duplicate key" in message
    )
    return unique and "email" in message


class TeacherRepository:
    """CRUD operations for the `teachers` table."""
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _guard(self, action: str):
        """Roll back and re-raise SQLAlchemy failures as store errors.

        Driver messages stay in the server log; callers only see the
        generic store error.
        """
        try:
            yield
        except IntegrityError as exc:
            self.session.rollback()
            if _is_email_conflict(exc):
                logger.info("store_conflict action=%s", action)
                raise DuplicateRecordError("email already registered") from exc
            logger.exception("store_failed action=%s", action)
            raise StoreError() from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("store_failed action=%s", action)
            raise StoreError() from exc

    def create(self, teacher: models.Teacher) -> models.Teacher:
        """Insert a new teacher with a freshly assigned id."""
        row = models.TeacherRow(
            id=uuid.uuid4(),
            password_hash=teacher.password_hash,
            **teacher.model_dump(include=set(PROFILE_FIELDS)),
        )
        with self._guard("create"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_record(row)

    def get_by_id(self, teacher_id: uuid.UUID) -> Optional[models.Teacher]:
        """Return a teacher by primary key or `None` if not found."""
        with self._guard("get_by_id"):
            row = self.session.get(models.TeacherRow, teacher_id)
        return _to_record(row) if row else None

    def get_by_email(self, email: str) -> Optional[models.Teacher]:
        """Return a teacher by email or `None` if not found."""
        stmt = select(models.TeacherRow).where(models.TeacherRow.email == email)
        with self._guard("get_by_email"):
            row = self.session.exec(stmt).first()
        return _to_record(row) if row else None

    def get_all(self) -> List[models.Teacher]:
        """Return every teacher ordered by full name, blank names last."""
        name = models.TeacherRow.full_name
        blank_last = case((or_(name.is_(None), name == ""), 1), else_=0)
        stmt = select(models.TeacherRow).order_by(blank_last, name)
        with self._guard("get_all"):
            rows = self.session.exec(stmt).all()
        return [_to_record(r) for r in rows]

    def update(self, teacher: models.Teacher) -> models.Teacher:
        """Rewrite the profile columns of an existing teacher.

        A non-empty `password_hash` replaces the stored one; an empty one
        leaves the stored hash as it is.
        """
        with self._guard("update"):
            row = self.session.get(models.TeacherRow, teacher.id)
            if row is None:
                raise RecordNotFoundError()
            for field in PROFILE_FIELDS:
                setattr(row, field, getattr(teacher, field))
            if teacher.password_hash:
                row.password_hash = teacher.password_hash
            row.updated_at = models.utcnow()
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_record(row)

    def update_password(self, teacher_id: uuid.UUID, password_hash: str) -> None:
        """Replace only the stored password hash."""
        if not password_hash:
            raise ValueError("password_hash must not be empty")
        with self._guard("update_password"):
            row = self.session.get(models.TeacherRow, teacher_id)
            if row is None:
                raise RecordNotFoundError()
            row.password_hash = password_hash
            row.updated_at = models.utcnow()
            self.session.add(row)
            self.session.commit()

    def delete(self, teacher_id: uuid.UUID) -> None:
        """Hard-delete a teacher; raise `RecordNotFoundError` if nothing matched."""
        stmt = delete(models.TeacherRow).where(models.TeacherRow.id == teacher_id)
        with self._guard("delete"):
            result = self.session.exec(stmt)
            self.session.commit()
        if result.rowcount == 0:
            raise RecordNotFoundError()
