"""Business logic for teacher records.

`TeacherService` sits between the HTTP controllers and the entity store.
It validates input before any I/O, hashes passwords with the injected
`PasswordCodec`, translates store errors into service errors, and clears
`password_hash` on every record it returns.
"""

import logging
import uuid
from typing import List, Optional

from . import models
from .errors import (
    DuplicateRecordError,
    InvalidCredentialsError,
    RecordNotFoundError,
    StoreError,
    TeacherConflictError,
    TeacherNotFoundError,
    TeacherStoreError,
    TeacherValidationError,
)
from .repositories import TeacherStore
from .security import PasswordCodec

logger = logging.getLogger("teacher_registry.service")

NIL_ID = uuid.UUID(int=0)


def redact(teacher: models.Teacher) -> models.Teacher:
    """Return a copy of `teacher` with the credential hash cleared."""
    return teacher.model_copy(update={"password_hash": ""})


def _require_id(teacher_id: Optional[uuid.UUID]) -> uuid.UUID:
    if teacher_id is None or teacher_id == NIL_ID:
        raise TeacherValidationError("teacher id is required")
    return teacher_id


class TeacherService:
    """Register, read, update, authenticate and delete teachers."""
    def __init__(self, store: TeacherStore, codec: PasswordCodec):
        self.store = store
        self.codec = codec

    def register(self, teacher: Optional[models.Teacher], password: str) -> models.Teacher:
        """Hash `password`, persist `teacher` and return the created record.

        Raises `TeacherValidationError` for a missing payload or empty
        password and `TeacherConflictError` when the email is taken.
        """
        if teacher is None:
            raise TeacherValidationError("teacher payload is required")
        if not password:
            raise TeacherValidationError("password is required")
        pending = teacher.model_copy(update={"id": None, "password_hash": self.codec.hash(password)})
        try:
            created = self.store.create(pending)
        except DuplicateRecordError:
            raise TeacherConflictError()
        except StoreError:
            raise TeacherStoreError("failed to create teacher")
        logger.info("teacher_registered id=%s", created.id)
        return redact(created)

    def get(self, teacher_id: uuid.UUID) -> models.Teacher:
        """Return one teacher or raise `TeacherNotFoundError`."""
        _require_id(teacher_id)
        try:
            teacher = self.store.get_by_id(teacher_id)
        except StoreError:
            raise TeacherStoreError("failed to fetch teacher")
        if teacher is None:
            raise TeacherNotFoundError()
        return redact(teacher)

    def get_all(self) -> List[models.Teacher]:
        """Return all teachers ordered by full name (possibly empty)."""
        try:
            teachers = self.store.get_all()
        except StoreError:
            raise TeacherStoreError("failed to fetch teachers")
        return [redact(t) for t in teachers or []]

    def authenticate(self, email: str, password: str) -> models.Teacher:
        """Return the teacher whose credentials match.

        Unknown emails and wrong passwords raise the same
        `InvalidCredentialsError`; an unknown email still pays for one
        hash verification.
        """
        if not email or not password:
            self.codec.dummy_verify()
            raise InvalidCredentialsError()
        try:
            teacher = self.store.get_by_email(email)
        except StoreError:
            raise TeacherStoreError("failed to authenticate teacher")
        if teacher is None:
            self.codec.dummy_verify()
            logger.info("authentication_failed")
            raise InvalidCredentialsError()
        if not self.codec.verify(password, teacher.password_hash):
            logger.info("authentication_failed")
            raise InvalidCredentialsError()
        if self.codec.needs_rehash(teacher.password_hash):
            try:
                self.store.update_password(teacher.id, self.codec.hash(password))
                logger.info("password_rehashed id=%s", teacher.id)
            except StoreError:
                # the login itself succeeded; the upgrade is retried next time
                logger.warning("password_rehash_failed id=%s", teacher.id)
        return redact(teacher)

    def update_profile(self, teacher: Optional[models.Teacher]) -> models.Teacher:
        """Rewrite the profile fields of an existing teacher.

        The credential hash is always sent to the store empty so the
        stored one is kept; use `change_password` to replace it.
        """
        if teacher is None:
            raise TeacherValidationError("teacher payload is required")
        _require_id(teacher.id)
        changes = teacher.model_copy(update={"password_hash": ""})
        try:
            updated = self.store.update(changes)
        except RecordNotFoundError:
            raise TeacherNotFoundError()
        except DuplicateRecordError:
            raise TeacherConflictError()
        except StoreError:
            raise TeacherStoreError("failed to update teacher")
        logger.info("teacher_updated id=%s", updated.id)
        return redact(updated)

    def change_password(self, teacher_id: uuid.UUID, password: str) -> None:
        """Hash `password` and store it as the teacher's only credential change."""
        _require_id(teacher_id)
        if not password:
            raise TeacherValidationError("password is required")
        try:
            self.store.update_password(teacher_id, self.codec.hash(password))
        except RecordNotFoundError:
            raise TeacherNotFoundError()
        except StoreError:
            raise TeacherStoreError("failed to change password")
        logger.info("password_changed id=%s", teacher_id)

    def delete(self, teacher_id: uuid.UUID) -> None:
        """Hard-delete a teacher or raise `TeacherNotFoundError`."""
        _require_id(teacher_id)
        try:
            self.store.delete(teacher_id)
        except RecordNotFoundError:
            raise TeacherNotFoundError()
        except StoreError:
            raise TeacherStoreError("failed to delete teacher")
        logger.info("teacher_deleted id=%s", teacher_id)
