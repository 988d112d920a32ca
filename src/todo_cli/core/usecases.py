# src/todo_cli/core/usecases.py

"""
Use cases: one class per user-facing operation.

Each use case receives the ports it needs in its constructor and exposes a
single invoke(). They hold no state between calls, never retry, and do not log.
Any TodoError escaping invoke() is tagged with the operation name so the CLI can
print "failed to <operation>: <detail>".
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator

from .errors import DuplicateEmailError, TaskNotFoundError, TodoError
from .models import DEFAULT_BCRYPT_ROUNDS, Hash, Task, User
from .ports import TaskRepo, UserRepo


@contextlib.contextmanager
def _operation(name: str) -> Iterator[None]:
    try:
        yield
    except TodoError as exc:
        if exc.operation is None:
            exc.operation = name
        raise


class CreateUser:
    def __init__(self, repo: UserRepo, *, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._repo = repo
        self._rounds = bcrypt_rounds

    def invoke(self, email: str, password: str) -> User:
        with _operation("create user"):
            if email and self._repo.find_by_email(email) is not None:
                raise DuplicateEmailError(f"email {email} is already registered")

            user_id = self._repo.next_id()
            password_hash = Hash.new(password, rounds=self._rounds)
            user = User(id=user_id, email=email, password_hash=password_hash)
            self._repo.save(user)
            return user


class AuthenticateUser:
    """Returns None for an unknown email or a wrong password; that is not an error."""

    def __init__(self, repo: UserRepo) -> None:
        self._repo = repo

    def invoke(self, email: str, password: str) -> User | None:
        with _operation("authenticate user"):
            user = self._repo.find_by_email(email)
            if user is None:
                return None
            if not user.password_hash.verify(password):
                return None
            return user


class DeleteUser:
    """
    Best-effort sequential cascade: tasks first, then the user record.

    There is no rollback. If deleting the user fails, the tasks are already
    gone and the user record stays.
    """

    def __init__(self, user_repo: UserRepo, task_repo: TaskRepo) -> None:
        self._users = user_repo
        self._tasks = task_repo

    def invoke(self, user_id: str) -> None:
        with _operation("delete user"):
            self._tasks.delete_of_user(user_id)
            self._users.delete(user_id)


class GetTasks:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def invoke(self, user_id: str) -> list[Task]:
        with _operation("get tasks"):
            return self._repo.get(user_id)


class CreateTask:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def invoke(self, user_id: str, name: str) -> Task:
        with _operation("create task"):
            task = Task(id=self._repo.next_id(), user_id=user_id, name=name)
            self._repo.save(task)
            return task


class CompleteTask:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def invoke(self, task_id: str, user_id: str) -> Task:
        with _operation("complete task"):
            task = self._repo.find_of_user(task_id, user_id)
            if task is None:
                raise TaskNotFoundError(f"no such task: {task_id}")
            task = task.complete()
            self._repo.save(task)
            return task


class DeleteTask:
    """Deletes a task owned by user_id; a foreign or unknown id is TaskNotFoundError."""

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def invoke(self, task_id: str, user_id: str) -> None:
        with _operation("delete task"):
            if self._repo.find_of_user(task_id, user_id) is None:
                raise TaskNotFoundError(f"no such task: {task_id}")
            self._repo.delete(task_id)
