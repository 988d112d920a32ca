# src/todo_cli/core/models.py

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass, field, replace

import bcrypt

from .errors import HashError, ValidationError

DEFAULT_BCRYPT_ROUNDS = 12


def _require(value: str, message: str) -> None:
    if not value or not value.strip():
        raise ValidationError(message)


def _prepare(plain: str) -> bytes:
    """
    bcrypt only looks at the first 72 bytes and rejects NUL bytes.
    Feed it a fixed-size SHA-256 digest (base64) so any UTF-8 input works.
    """
    digest = hashlib.sha256(plain.encode("utf-8")).digest()
    return base64.b64encode(digest)


@dataclass(frozen=True, slots=True)
class Hash:
    """
    Salted one-way password digest.

    Build it with Hash.new(plaintext); Hash.from_digest() is only for storage
    backends restoring a previously saved digest.
    """

    digest: str = field(repr=False)

    @classmethod
    def new(cls, plain: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> Hash:
        if not plain:
            raise ValidationError("password should not be empty")
        try:
            hashed = bcrypt.hashpw(_prepare(plain), bcrypt.gensalt(rounds=rounds))
        except ValueError as exc:
            raise HashError(f"failed to hash password: {exc}") from exc
        return cls(hashed.decode("utf-8"))

    @classmethod
    def from_digest(cls, digest: str) -> Hash:
        return cls(digest)

    def verify(self, plain: str) -> bool:
        if not plain:
            return False
        try:
            return bcrypt.checkpw(_prepare(plain), self.digest.encode("utf-8"))
        except ValueError as exc:
            raise HashError(f"failed to verify password: {exc}") from exc


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str
    password_hash: Hash

    def __post_init__(self) -> None:
        _require(self.id, "id should not be empty")
        _require(self.email, "email should not be empty")


@dataclass(frozen=True, slots=True)
class Task:
    """
    A to-do item owned by exactly one user.

    Immutable; complete() returns a completed copy, so `completed` never goes back to False.
    """

    id: str
    user_id: str
    name: str
    completed: bool = False

    def __post_init__(self) -> None:
        _require(self.id, "id should not be empty")
        _require(self.user_id, "user id should not be empty")
        _require(self.name, "name should not be empty")

    def complete(self) -> Task:
        return replace(self, completed=True)
