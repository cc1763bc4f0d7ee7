"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and validate payloads before
they reach the service. Empty strings for dates and gender are accepted
and treated as "not supplied".
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .models import Gender, Teacher


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class TeacherProfileIn(BaseModel):
    """Profile fields accepted on create and update."""
    email: EmailStr
    full_name: str = Field(min_length=2)
    phone: str = Field(min_length=1)
    is_active: bool = True
    photo: str = ""
    date_of_birth: Optional[date] = None
    joining_date: Optional[date] = None
    gender: Optional[Gender] = None
    bio: str = ""
    address: str = ""
    designation: str = ""
    qualification: str = ""

    # dates have no empty form: "" is stored and returned as null
    @field_validator("date_of_birth", "joining_date", "gender", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("photo", "bio", "address", "designation", "qualification", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v

    def to_teacher(self, teacher_id: Optional[uuid.UUID] = None) -> Teacher:
        data = self.model_dump(exclude={"gender"})
        data["gender"] = self.gender.value if self.gender else ""
        return Teacher(id=teacher_id, **data)


class TeacherCreate(TeacherProfileIn):
    """Payload for `POST /api/v1/teachers`."""
    password: str = Field(min_length=4)


class TeacherUpdate(TeacherProfileIn):
    """Payload for `PUT /api/v1/teachers/{id}`.

    Any `id`, `password` or `password_hash` keys in the body are ignored.
    """


class PasswordChangeIn(BaseModel):
    """Payload for `PUT /api/v1/teachers/{id}/password`."""
    password: str = Field(min_length=4)


class CredentialsIn(BaseModel):
    """Payload for `POST /api/v1/teachers/authenticate`.

    `email` is normalized the same way as on registration, so the stored
    address and the submitted one compare equal.
    """
    email: EmailStr
    password: str


class TeacherOut(BaseModel):
    """Teacher as returned to clients; there is no credential field.

    Absent dates are `null`, never `""`; absent text fields are `""`.
    """
    id: uuid.UUID
    email: str
    full_name: str
    phone: str
    is_active: bool
    photo: str
    date_of_birth: Optional[date]
    joining_date: Optional[date]
    gender: str
    bio: str
    address: str
    designation: str
    qualification: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_teacher(cls, teacher: Teacher) -> "TeacherOut":
        return cls.model_validate(teacher.model_dump(exclude={"password_hash"}))
