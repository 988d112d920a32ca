# src/todo_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import Presenter, SessionStore, TaskRepo, UserRepo


@dataclass
class AppState:
    # Settings object (config.Settings or a SimpleNamespace in tests).
    settings: Any

    users: UserRepo
    tasks: TaskRepo
    session: SessionStore
    presenter: Presenter
