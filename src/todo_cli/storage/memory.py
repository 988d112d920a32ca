# src/todo_cli/storage/memory.py

"""
In-memory backends (dicts keyed by id).

They live as long as the process, so they are mostly useful in tests and for
the `memory` storage setting. Entities are immutable, so they are stored as is.
"""

from __future__ import annotations

from ..core.models import Task, User
from .ids import TASK_ID_LENGTH, USER_ID_LENGTH, generate_string


class MemoryUserRepo:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def next_id(self) -> str:
        return generate_string(USER_ID_LENGTH)

    def find_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def save(self, user: User) -> None:
        self._users[user.id] = user

    def delete(self, id: str) -> None:
        self._users.pop(id, None)


class MemoryTaskRepo:
    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def next_id(self) -> str:
        return generate_string(TASK_ID_LENGTH)

    def get(self, user_id: str) -> list[Task]:
        return [t for t in self._tasks.values() if t.user_id == user_id]

    def find_of_user(self, id: str, user_id: str) -> Task | None:
        task = self._tasks.get(id)
        if task is None or task.user_id != user_id:
            return None
        return task

    def save(self, task: Task) -> None:
        self._tasks[task.id] = task

    def delete(self, id: str) -> None:
        self._tasks.pop(id, None)

    def delete_of_user(self, user_id: str) -> None:
        for task_id in [t.id for t in self._tasks.values() if t.user_id == user_id]:
            del self._tasks[task_id]


class MemorySessionStore:
    def __init__(self) -> None:
        self._user_id: str | None = None

    def push_authenticated_user_id(self, user_id: str) -> None:
        self._user_id = user_id

    def pop_authenticated_user_id(self) -> str | None:
        return self._user_id or None

    def drop_authenticated_user_id(self) -> None:
        self._user_id = None
