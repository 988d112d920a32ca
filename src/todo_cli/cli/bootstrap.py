# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- picks the storage backend from settings,
- wires concrete repositories, session store and presenter into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StorageError
from ..core.ports import Presenter
from ..core.state import AppState
from ..storage.json_file import JsonSessionStore, JsonStoreFile, JsonTaskRepo, JsonUserRepo
from ..storage.memory import MemorySessionStore, MemoryTaskRepo, MemoryUserRepo
from .presenter import TextPresenter

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        settings.store_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"failed to create data directory: {exc}") from exc


def create_initial_state(*, settings=None, presenter: Presenter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if presenter is None:
        presenter = TextPresenter()

    backend = getattr(settings, "storage_backend", "file")

    if backend == "memory":
        logger.debug("Using in-memory storage (nothing is persisted).")
        return AppState(
            settings=settings,
            users=MemoryUserRepo(),
            tasks=MemoryTaskRepo(),
            session=MemorySessionStore(),
            presenter=presenter,
        )

    _ensure_local_dirs(settings)
    store = JsonStoreFile(settings.store_path)
    logger.debug("Using JSON storage at %s", store.path)
    return AppState(
        settings=settings,
        users=JsonUserRepo(store),
        tasks=JsonTaskRepo(store),
        session=JsonSessionStore(store),
        presenter=presenter,
    )
