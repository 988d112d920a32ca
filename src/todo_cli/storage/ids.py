# src/todo_cli/storage/ids.py

from __future__ import annotations

import secrets
import string

ALPHANUMERIC = string.ascii_letters + string.digits

USER_ID_LENGTH = 50
TASK_ID_LENGTH = 70


def generate_string(length: int) -> str:
    """Random alphanumeric string from the OS CSPRNG."""
    if length <= 0:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))
