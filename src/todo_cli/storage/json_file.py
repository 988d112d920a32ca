# src/todo_cli/storage/json_file.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.errors import StorageError, TodoError
from ..core.models import Hash, Task, User
from .ids import TASK_ID_LENGTH, USER_ID_LENGTH, generate_string

logger = logging.getLogger(__name__)

StoreDoc = dict[str, Any]


def _empty_store() -> StoreDoc:
    return {
        "users": {},
        "tasks": {},
        "session": {"authenticated_user_id": ""},
    }


class JsonStoreFile:
    """
    Single JSON document holding users, tasks and the session.

    Every read loads the whole file and every mutation rewrites it
    (load-mutate-store). There is no locking: two processes writing at the same
    time can silently overwrite each other's changes.

    Writes go to a sibling temp file first and are moved into place with
    os.replace, so readers never see a half-written document. The temp file is
    created with mode 0600 and removed if the write fails.
    """

    def __init__(self, path: str | Path = "store.json") -> None:
        self._path = Path(path)
        self._init_if_missing()
        logger.debug("JsonStoreFile ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _init_if_missing(self) -> None:
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"failed to create store directory {self._path.parent}: {exc}") from exc
        self.store(_empty_store())
        logger.info("Initialized empty store at %s", self._path)

    # ---- public API ----

    def load(self) -> StoreDoc:
        self._init_if_missing()
        try:
            raw = self._path.read_text("utf-8")
        except OSError as exc:
            raise StorageError(f"failed to read store {self._path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StorageError(f"store {self._path} is not valid UTF-8: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"store {self._path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"store {self._path} must contain a JSON object")

        doc = _empty_store()
        for key in ("users", "tasks", "session"):
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, dict):
                raise StorageError(f"store {self._path}: '{key}' must be an object")
            doc[key] = value
        return doc

    def store(self, doc: StoreDoc) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            payload = json.dumps(doc, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"failed to encode store {self._path}: {exc}") from exc
        try:
            # Holds password digests: the temp file is created 0600 before anything is written.
            tmp.unlink(missing_ok=True)
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"failed to write store {self._path}: {exc}") from exc


def _user_to_row(user: User) -> dict[str, str]:
    return {"id": user.id, "email": user.email, "password": user.password_hash.digest}


def _row_to_user(row: Any) -> User:
    try:
        return User(
            id=str(row["id"]),
            email=str(row["email"]),
            password_hash=Hash.from_digest(str(row["password"])),
        )
    except (KeyError, TypeError, TodoError) as exc:
        raise StorageError(f"corrupt user record: {exc}") from exc


def _task_to_row(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "user_id": task.user_id,
        "name": task.name,
        "completed": task.completed,
    }


def _completed_flag(value: Any) -> bool:
    # "false" must not load as True.
    if not isinstance(value, bool):
        raise TypeError(f"completed must be a boolean, got {value!r}")
    return value


def _row_to_task(row: Any) -> Task:
    try:
        return Task(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=str(row["name"]),
            completed=_completed_flag(row.get("completed", False)),
        )
    except (KeyError, TypeError, AttributeError, TodoError) as exc:
        raise StorageError(f"corrupt task record: {exc}") from exc


class JsonUserRepo:
    def __init__(self, file: JsonStoreFile) -> None:
        self._file = file

    def next_id(self) -> str:
        return generate_string(USER_ID_LENGTH)

    def find_by_email(self, email: str) -> User | None:
        doc = self._file.load()
        for row in doc["users"].values():
            user = _row_to_user(row)
            if user.email == email:
                return user
        return None

    def save(self, user: User) -> None:
        doc = self._file.load()
        doc["users"][user.id] = _user_to_row(user)
        self._file.store(doc)
        logger.debug("User saved id=%s", user.id)

    def delete(self, id: str) -> None:
        doc = self._file.load()
        if doc["users"].pop(id, None) is None:
            return
        self._file.store(doc)
        logger.debug("User deleted id=%s", id)


class JsonTaskRepo:
    def __init__(self, file: JsonStoreFile) -> None:
        self._file = file

    def next_id(self) -> str:
        return generate_string(TASK_ID_LENGTH)

    def get(self, user_id: str) -> list[Task]:
        doc = self._file.load()
        tasks = [_row_to_task(row) for row in doc["tasks"].values()]
        return [t for t in tasks if t.user_id == user_id]

    def find_of_user(self, id: str, user_id: str) -> Task | None:
        doc = self._file.load()
        row = doc["tasks"].get(id)
        if row is None:
            return None
        task = _row_to_task(row)
        return task if task.user_id == user_id else None

    def save(self, task: Task) -> None:
        doc = self._file.load()
        doc["tasks"][task.id] = _task_to_row(task)
        self._file.store(doc)
        logger.debug("Task saved id=%s completed=%s", task.id, task.completed)

    def delete(self, id: str) -> None:
        doc = self._file.load()
        if doc["tasks"].pop(id, None) is None:
            return
        self._file.store(doc)
        logger.debug("Task deleted id=%s", id)

    def delete_of_user(self, user_id: str) -> None:
        doc = self._file.load()
        owned = [
            task_id
            for task_id, row in doc["tasks"].items()
            if isinstance(row, dict) and row.get("user_id") == user_id
        ]
        if not owned:
            return
        for task_id in owned:
            del doc["tasks"][task_id]
        self._file.store(doc)
        logger.info("Deleted %d task(s) of user_id=%s", len(owned), user_id)


class JsonSessionStore:
    """Session slot kept in the same file as the entities, under "session"."""

    def __init__(self, file: JsonStoreFile) -> None:
        self._file = file

    def push_authenticated_user_id(self, user_id: str) -> None:
        doc = self._file.load()
        doc["session"] = {"authenticated_user_id": user_id}
        self._file.store(doc)

    def pop_authenticated_user_id(self) -> str | None:
        doc = self._file.load()
        user_id = doc["session"].get("authenticated_user_id") or ""
        return str(user_id) or None

    def drop_authenticated_user_id(self) -> None:
        doc = self._file.load()
        doc["session"] = {"authenticated_user_id": ""}
        self._file.store(doc)
