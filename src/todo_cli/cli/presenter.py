# src/todo_cli/cli/presenter.py

from __future__ import annotations

import sys
from typing import TextIO

from ..core.models import Task, User


class TextPresenter:
    """Plain-text rendering: results to stdout, errors to stderr."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err

    # Resolved lazily so pytest's capsys (which swaps sys.stdout) still sees the output.
    def _stdout(self) -> TextIO:
        return self._out or sys.stdout

    def _stderr(self) -> TextIO:
        return self._err or sys.stderr

    def render_message(self, msg: str) -> None:
        print(msg, file=self._stdout())

    def render_error(self, msg: str) -> None:
        print(msg, file=self._stderr())

    def render_user(self, user: User) -> None:
        print(f"ID: {user.id}", file=self._stdout())
        print(f"Email: {user.email}", file=self._stdout())

    def render_task(self, task: Task) -> None:
        mark = "x" if task.completed else " "
        print(f"[{mark}] {task.name} (ID: {task.id})", file=self._stdout())

    def render_tasks(self, tasks: list[Task]) -> None:
        if not tasks:
            self.render_message("No tasks.")
            return
        for task in sorted(tasks, key=lambda t: (t.completed, t.name)):
            self.render_task(task)
