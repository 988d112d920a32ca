# tests/test_usecases.py

from __future__ import annotations

import pytest

from todo_cli.core.errors import DuplicateEmailError, StorageError, TaskNotFoundError, ValidationError
from todo_cli.core.usecases import (
    AuthenticateUser,
    CompleteTask,
    CreateTask,
    CreateUser,
    DeleteTask,
    DeleteUser,
    GetTasks,
)
from todo_cli.storage.memory import MemoryTaskRepo, MemoryUserRepo

from .conftest import TEST_BCRYPT_ROUNDS
from .fakes import FailingDeleteUserRepo

EMAIL, PASSWORD = "test@example.com", "aiueo"


def _create_user(users, email: str = EMAIL, password: str = PASSWORD):
    return CreateUser(users, bcrypt_rounds=TEST_BCRYPT_ROUNDS).invoke(email, password)


def test_create_user(backend) -> None:
    user = _create_user(backend.users)

    assert user.email == EMAIL
    assert len(user.id) == 50
    assert user.password_hash.verify(PASSWORD)
    assert not user.password_hash.verify("wrong")
    assert backend.users.find_by_email(EMAIL) == user


def test_create_user_rejects_empty_fields(backend) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _create_user(backend.users, email="")
    assert str(exc_info.value) == "failed to create user: email should not be empty"

    with pytest.raises(ValidationError, match="password should not be empty"):
        _create_user(backend.users, password="")

    assert backend.users.find_by_email("") is None
    assert backend.users.find_by_email(EMAIL) is None


def test_create_user_rejects_duplicate_email(backend) -> None:
    first = _create_user(backend.users)

    with pytest.raises(DuplicateEmailError):
        _create_user(backend.users, password="another")

    assert backend.users.find_by_email(EMAIL) == first


def test_authenticate_user(backend) -> None:
    created = _create_user(backend.users)

    user = AuthenticateUser(backend.users).invoke(EMAIL, PASSWORD)

    assert user is not None
    assert (user.id, user.email) == (created.id, created.email)


def test_authenticate_user_no_match_is_not_an_error(backend) -> None:
    _create_user(backend.users)

    assert AuthenticateUser(backend.users).invoke(EMAIL, "wrong") is None
    assert AuthenticateUser(backend.users).invoke("nobody@example.com", PASSWORD) is None


def test_delete_user_cascades_to_own_tasks_only(backend) -> None:
    user = _create_user(backend.users)
    other = _create_user(backend.users, email="other@example.com")

    CreateTask(backend.tasks).invoke(user.id, "test task name 1")
    CreateTask(backend.tasks).invoke(user.id, "test task name 2")
    kept = CreateTask(backend.tasks).invoke(other.id, "someone else's task")

    DeleteUser(backend.users, backend.tasks).invoke(user.id)

    assert backend.users.find_by_email(EMAIL) is None
    assert GetTasks(backend.tasks).invoke(user.id) == []
    assert GetTasks(backend.tasks).invoke(other.id) == [kept]
    assert backend.users.find_by_email("other@example.com") == other


def test_delete_user_is_best_effort_sequential() -> None:
    users, tasks = MemoryUserRepo(), MemoryTaskRepo()
    user = _create_user(users)
    CreateTask(tasks).invoke(user.id, "doomed")

    with pytest.raises(StorageError) as exc_info:
        DeleteUser(FailingDeleteUserRepo(users), tasks).invoke(user.id)

    assert exc_info.value.operation == "delete user"
    # Tasks went first; the user record survived the failed second step.
    assert GetTasks(tasks).invoke(user.id) == []
    assert users.find_by_email(EMAIL) == user


def test_get_tasks(backend) -> None:
    user_id = "test user id"
    created = CreateTask(backend.tasks).invoke(user_id, "test task name")

    tasks = GetTasks(backend.tasks).invoke(user_id)

    assert tasks == [created]
    assert GetTasks(backend.tasks).invoke("someone else") == []


def test_create_task(backend) -> None:
    user_id, name = "test user id", "test task name"
    task = CreateTask(backend.tasks).invoke(user_id, name)

    assert task.user_id == user_id
    assert task.name == name
    assert task.completed is False
    assert len(task.id) == 70


def test_create_task_rejects_empty_fields(backend) -> None:
    with pytest.raises(ValidationError, match="failed to create task: name should not be empty"):
        CreateTask(backend.tasks).invoke("u1", "")
    with pytest.raises(ValidationError, match="user id should not be empty"):
        CreateTask(backend.tasks).invoke("", "name")

    assert GetTasks(backend.tasks).invoke("u1") == []


def test_complete_task(backend) -> None:
    user_id = "test user id"
    created = CreateTask(backend.tasks).invoke(user_id, "test task name")

    task = CompleteTask(backend.tasks).invoke(created.id, user_id)

    assert task.completed is True
    assert GetTasks(backend.tasks).invoke(user_id)[0].completed is True


def test_complete_task_of_another_user_is_not_found(backend) -> None:
    created = CreateTask(backend.tasks).invoke("owner", "test task name")

    with pytest.raises(TaskNotFoundError) as exc_info:
        CompleteTask(backend.tasks).invoke(created.id, "intruder")

    assert exc_info.value.operation == "complete task"
    assert GetTasks(backend.tasks).invoke("owner")[0].completed is False

    with pytest.raises(TaskNotFoundError):
        CompleteTask(backend.tasks).invoke("missing", "owner")


def test_delete_task(backend) -> None:
    user_id = "test user id"
    created = CreateTask(backend.tasks).invoke(user_id, "test task name")
    kept = CreateTask(backend.tasks).invoke(user_id, "another")

    DeleteTask(backend.tasks).invoke(created.id, user_id)

    assert GetTasks(backend.tasks).invoke(user_id) == [kept]


def test_delete_task_checks_ownership(backend) -> None:
    created = CreateTask(backend.tasks).invoke("owner", "test task name")

    with pytest.raises(TaskNotFoundError, match="failed to delete task"):
        DeleteTask(backend.tasks).invoke(created.id, "intruder")

    assert GetTasks(backend.tasks).invoke("owner") == [created]
