# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_cli.cli.bootstrap import create_initial_state
from todo_cli.core.state import AppState
from todo_cli.storage.json_file import JsonSessionStore, JsonStoreFile, JsonTaskRepo, JsonUserRepo
from todo_cli.storage.memory import MemorySessionStore, MemoryTaskRepo, MemoryUserRepo

from .fakes import FakePresenter

# Cheapest cost bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="WARNING",
        log_to_file=False,
        storage_backend="file",
        data_dir=tmp_path,
        store_path=tmp_path / "store.json",
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
    )


@pytest.fixture()
def presenter() -> FakePresenter:
    return FakePresenter()


@pytest.fixture()
def state(settings: SimpleNamespace, presenter: FakePresenter) -> AppState:
    """AppState wired with the real JSON store in tmp_path and a recording presenter."""
    return create_initial_state(settings=settings, presenter=presenter)


@pytest.fixture(params=["memory", "file"])
def backend(request, tmp_path: Path) -> SimpleNamespace:
    """
    Both storage backends behind the same ports; tests using this fixture run twice.
    """
    if request.param == "memory":
        return SimpleNamespace(
            users=MemoryUserRepo(),
            tasks=MemoryTaskRepo(),
            session=MemorySessionStore(),
        )
    store = JsonStoreFile(tmp_path / "store.json")
    return SimpleNamespace(
        users=JsonUserRepo(store),
        tasks=JsonTaskRepo(store),
        session=JsonSessionStore(store),
    )
