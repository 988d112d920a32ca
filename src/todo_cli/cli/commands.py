# src/todo_cli/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config import ENV_VARS
from ..core.errors import AuthenticationRequiredError
from ..core.state import AppState
from ..core.usecases import (
    AuthenticateUser,
    CompleteTask,
    CreateTask,
    CreateUser,
    DeleteTask,
    DeleteUser,
    GetTasks,
)

CommandHandler = Callable[[AppState, argparse.Namespace], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Option:
    """A required `--name VALUE` option of a subcommand."""

    name: str
    help: str


@dataclass(slots=True)
class _Command:
    handler: CommandHandler
    help_text: str
    options: tuple[Option, ...] = ()
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """Two-level command registry (`<group> <command> --options`) rendered into argparse."""

    def __init__(self) -> None:
        self._groups: dict[str, str] = {}
        self._commands: dict[str, dict[str, _Command]] = {}

    def add_group(self, name: str, help_text: str) -> None:
        key = name.lower()
        self._groups[key] = help_text
        self._commands.setdefault(key, {})

    def register(
        self,
        group: str,
        name: str,
        handler: CommandHandler,
        help_text: str,
        options: Sequence[Option] = (),
        aliases: list[str] | None = None,
    ) -> None:
        group_key = group.lower()
        if group_key not in self._groups:
            raise KeyError(f"unknown command group: {group}")
        self._commands[group_key][name.lower()] = _Command(
            handler=handler,
            help_text=help_text,
            options=tuple(options),
            aliases=[a.lower() for a in (aliases or [])],
        )

    def build_parser(self, prog: str = "todo") -> argparse.ArgumentParser:
        epilog_lines = ["environment variables:"]
        epilog_lines += [f"  {name:<20} {text}" for name, text in ENV_VARS.items()]

        parser = argparse.ArgumentParser(
            prog=prog,
            description="Personal task list with local user accounts.",
            epilog="\n".join(epilog_lines),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        groups = parser.add_subparsers(dest="group", metavar="<group>", required=True)

        for group_name, group_help in self._groups.items():
            group_parser = groups.add_parser(group_name, help=group_help)
            commands = group_parser.add_subparsers(
                dest="command", metavar="<command>", required=True
            )
            for cmd_name, cmd in self._commands[group_name].items():
                cmd_parser = commands.add_parser(cmd_name, help=cmd.help_text, aliases=cmd.aliases)
                for opt in cmd.options:
                    cmd_parser.add_argument(
                        f"--{opt.name}",
                        dest=opt.name.replace("-", "_"),
                        required=True,
                        help=opt.help,
                        metavar=opt.name.upper(),
                    )
                cmd_parser.set_defaults(handler=cmd.handler)

        return parser

    def dispatch(self, state: AppState, args: argparse.Namespace) -> None:
        handler: CommandHandler | None = getattr(args, "handler", None)
        if handler is None:
            raise ValueError("parsed arguments carry no command handler")
        logger.debug("Dispatching %s %s", args.group, args.command)
        handler(state, args)


registry = CommandRegistry()


def _authenticated_user_id(state: AppState) -> str:
    user_id = state.session.pop_authenticated_user_id()
    if not user_id:
        raise AuthenticationRequiredError()
    return user_id


# ---- user commands ----


def cmd_user_create(state: AppState, args: argparse.Namespace) -> None:
    rounds = getattr(state.settings, "bcrypt_rounds", 12)
    user = CreateUser(state.users, bcrypt_rounds=rounds).invoke(args.email, args.password)
    state.session.push_authenticated_user_id(user.id)
    logger.info("User created id=%s", user.id)

    state.presenter.render_message("User is successfully created.")
    state.presenter.render_user(user)


def cmd_user_login(state: AppState, args: argparse.Namespace) -> None:
    user = AuthenticateUser(state.users).invoke(args.email, args.password)
    if user is None:
        logger.info("Authentication rejected for email=%s", args.email)
        state.presenter.render_error("Invalid credentials.")
        return

    state.session.push_authenticated_user_id(user.id)
    logger.info("User authenticated id=%s", user.id)

    state.presenter.render_message("User is successfully authenticated.")
    state.presenter.render_user(user)


def cmd_user_logout(state: AppState, args: argparse.Namespace) -> None:
    state.session.drop_authenticated_user_id()
    state.presenter.render_message("User is successfully logged out.")


def cmd_user_delete(state: AppState, args: argparse.Namespace) -> None:
    user_id = _authenticated_user_id(state)
    DeleteUser(state.users, state.tasks).invoke(user_id)
    state.session.drop_authenticated_user_id()
    logger.info("User deleted id=%s", user_id)

    state.presenter.render_message("User is successfully deleted.")


# ---- task commands ----


def cmd_task_get(state: AppState, args: argparse.Namespace) -> None:
    user_id = _authenticated_user_id(state)
    tasks = GetTasks(state.tasks).invoke(user_id)
    state.presenter.render_tasks(tasks)


def cmd_task_create(state: AppState, args: argparse.Namespace) -> None:
    user_id = _authenticated_user_id(state)
    task = CreateTask(state.tasks).invoke(user_id, args.name)

    state.presenter.render_message("Task is successfully created.")
    state.presenter.render_task(task)


def cmd_task_complete(state: AppState, args: argparse.Namespace) -> None:
    user_id = _authenticated_user_id(state)
    task = CompleteTask(state.tasks).invoke(args.id, user_id)

    state.presenter.render_message("Task is successfully completed.")
    state.presenter.render_task(task)


def cmd_task_delete(state: AppState, args: argparse.Namespace) -> None:
    user_id = _authenticated_user_id(state)
    DeleteTask(state.tasks).invoke(args.id, user_id)

    state.presenter.render_message("Task is successfully deleted.")


_EMAIL = Option("email", "account email")
_PASSWORD = Option("password", "account password")

registry.add_group("user", "register, log in and manage your account")
registry.register("user", "create", cmd_user_create, "register and log in", [_EMAIL, _PASSWORD])
registry.register(
    "user",
    "login",
    cmd_user_login,
    "log in with email and password",
    [_EMAIL, _PASSWORD],
    aliases=["authenticate"],
)
registry.register("user", "logout", cmd_user_logout, "forget the logged-in user")
registry.register("user", "delete", cmd_user_delete, "delete your account and all of its tasks")

registry.add_group("task", "manage the tasks of the logged-in user")
registry.register("task", "get", cmd_task_get, "list your tasks")
registry.register("task", "create", cmd_task_create, "add a task", [Option("name", "task name")])
registry.register(
    "task", "complete", cmd_task_complete, "mark a task as done", [Option("id", "task id")]
)
registry.register("task", "delete", cmd_task_delete, "delete a task", [Option("id", "task id")])
