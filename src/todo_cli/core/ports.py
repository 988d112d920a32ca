# src/todo_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Use cases depend on these Protocols instead of concrete backends, so the
in-memory and JSON-file stores are interchangeable and tests can swap in fakes.
"""

from typing import Protocol

from .models import Task, User


class UserRepo(Protocol):
    def next_id(self) -> str: ...
    def find_by_email(self, email: str) -> User | None: ...
    def save(self, user: User) -> None: ...
    def delete(self, id: str) -> None: ...


class TaskRepo(Protocol):
    def next_id(self) -> str: ...
    def get(self, user_id: str) -> list[Task]: ...

    # Returns None when the task exists but belongs to someone else.
    def find_of_user(self, id: str, user_id: str) -> Task | None: ...

    def save(self, task: Task) -> None: ...
    def delete(self, id: str) -> None: ...

    # Cascade used by DeleteUser only.
    def delete_of_user(self, user_id: str) -> None: ...


class SessionStore(Protocol):
    """
    Single slot holding the currently authenticated user id.

    pop_authenticated_user_id() reads without clearing; only
    drop_authenticated_user_id() empties the slot.
    """

    def push_authenticated_user_id(self, user_id: str) -> None: ...
    def pop_authenticated_user_id(self) -> str | None: ...
    def drop_authenticated_user_id(self) -> None: ...


class Renderer(Protocol):
    def render_message(self, msg: str) -> None: ...
    def render_error(self, msg: str) -> None: ...


class UserRenderer(Renderer, Protocol):
    def render_user(self, user: User) -> None: ...


class TaskRenderer(Renderer, Protocol):
    def render_task(self, task: Task) -> None: ...
    def render_tasks(self, tasks: list[Task]) -> None: ...


class Presenter(UserRenderer, TaskRenderer, Protocol):
    """Everything the CLI needs to show results."""
