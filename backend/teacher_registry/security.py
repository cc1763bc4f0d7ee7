"""Password hashing and verification.

`PasswordCodec` wraps a passlib `CryptContext` configured for salted
`pbkdf2_sha256` with an adaptive round count. Hashes are never
reversible; verification goes through passlib's constant-time compare.
"""

import secrets
from typing import Optional

from passlib.context import CryptContext

from .config import settings


class PasswordCodec:
    """One-way password codec used by `TeacherService`."""

    def __init__(self, rounds: Optional[int] = None):
        rounds = rounds or settings.PASSWORD_HASH_ROUNDS
        self._ctx = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
            pbkdf2_sha256__min_rounds=rounds,
        )
        # compared against when an account does not exist, see dummy_verify()
        self._dummy_hash = self._ctx.hash(secrets.token_urlsafe(16))

    def hash(self, plaintext: str) -> str:
        """Return a salted hash of `plaintext`. Empty input is rejected."""
        if not plaintext:
            raise ValueError("password must not be empty")
        return self._ctx.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return True if `plaintext` matches `hashed`.

        Empty, unrecognised or malformed hashes yield False.
        """
        if not plaintext or not hashed:
            return False
        try:
            return self._ctx.verify(plaintext, hashed)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend one verification so missing accounts cost as much as real ones."""
        self._ctx.verify("not-the-password", self._dummy_hash)

    def needs_rehash(self, hashed: str) -> bool:
        """Return True if `hashed` was produced with weaker settings."""
        try:
            return self._ctx.needs_update(hashed)
        except (ValueError, TypeError):
            return False
