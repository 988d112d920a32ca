# src/todo_cli/core/errors.py

"""
Error taxonomy shared by the core, the storage backends and the CLI.

Not-found is deliberately split in two:
- "not found as a value": lookups return None (find_by_email, find_of_user,
  AuthenticateUser) so callers can branch on it;
- "not found as an error": TaskNotFoundError, when an operation cannot proceed.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for every error the application reports to the user."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"failed to {self.operation}: {self.message}"
        return self.message


class ValidationError(TodoError):
    """A required field is empty."""


class DuplicateEmailError(TodoError):
    """Another user is already registered with this email."""


class TaskNotFoundError(TodoError):
    """The task does not exist or belongs to another user."""


class StorageError(TodoError):
    """Underlying store could not be read or written."""


class HashError(TodoError):
    """The hashing primitive failed (e.g. a corrupt stored digest)."""


class AuthenticationRequiredError(TodoError):
    """Raised by the calling layer when no user is logged in."""

    def __init__(self, message: str = "authentication is required.", **kwargs) -> None:
        super().__init__(message, **kwargs)
