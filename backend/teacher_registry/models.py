"""SQLModel data models.

`TeacherRow` is the `teachers` table. `Teacher` is the record shape the
repository hands out and the service works with; it is never attached
to a session, so clearing its `password_hash` cannot be flushed back to
the table.
"""

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class TeacherBase(SQLModel):
    """Profile fields shared by the table and the domain record.

    Optional text fields are empty strings rather than `None` so that a
    record reads back exactly as it was written. Dates stay `None` when
    absent.
    """
    email: str = Field(index=True, unique=True)
    full_name: str
    phone: str
    is_active: bool = True
    photo: str = ""
    date_of_birth: Optional[date] = None
    joining_date: Optional[date] = None
    gender: str = ""
    bio: str = ""
    address: str = ""
    designation: str = ""
    qualification: str = ""


class Teacher(TeacherBase):
    """A teacher as seen by the service layer.

    `id` is `None` until the store assigns one. `password_hash` is empty
    on every record the service returns to callers.
    """
    id: Optional[uuid.UUID] = None
    password_hash: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeacherRow(TeacherBase, table=True):
    """Persisted teacher row."""
    __tablename__ = "teachers"

    id: uuid.UUID = Field(primary_key=True)
    password_hash: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
