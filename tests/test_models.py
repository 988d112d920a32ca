# tests/test_models.py

from __future__ import annotations

import dataclasses

import pytest

from todo_cli.core.errors import HashError, ValidationError
from todo_cli.core.models import Hash, Task, User

from .conftest import TEST_BCRYPT_ROUNDS


def _hash(plain: str) -> Hash:
    return Hash.new(plain, rounds=TEST_BCRYPT_ROUNDS)


def test_hash_verifies_only_the_original_plaintext() -> None:
    h = _hash("aiueo")

    assert h.verify("aiueo")
    assert not h.verify("aiueO")
    assert not h.verify("")
    assert "aiueo" not in h.digest


def test_hash_is_salted() -> None:
    assert _hash("same").digest != _hash("same").digest


def test_hash_rejects_empty_plaintext() -> None:
    with pytest.raises(ValidationError):
        _hash("")


def test_hash_accepts_long_and_unusual_input() -> None:
    # Longer than bcrypt's 72-byte window: the tail must still matter.
    base = "p" * 100
    h = _hash(base + "1")
    assert h.verify(base + "1")
    assert not h.verify(base + "2")

    odd = "пароль\x00ünïcode 🔑"
    assert _hash(odd).verify(odd)


def test_hash_round_trips_through_digest() -> None:
    h = _hash("secret")
    restored = Hash.from_digest(h.digest)
    assert restored == h
    assert restored.verify("secret")


def test_corrupt_digest_raises_hash_error() -> None:
    with pytest.raises(HashError):
        Hash.from_digest("not-a-bcrypt-hash").verify("secret")


def test_user_requires_id_and_email() -> None:
    h = _hash("pw")
    with pytest.raises(ValidationError, match="id should not be empty"):
        User(id="", email="a@example.com", password_hash=h)
    with pytest.raises(ValidationError, match="email should not be empty"):
        User(id="u1", email="", password_hash=h)


@pytest.mark.parametrize(
    ("task_id", "user_id", "name", "message"),
    [
        ("", "u1", "buy milk", "id should not be empty"),
        ("t1", "", "buy milk", "user id should not be empty"),
        ("t1", "u1", "", "name should not be empty"),
        ("t1", "u1", "   ", "name should not be empty"),
    ],
)
def test_task_requires_non_empty_fields(task_id, user_id, name, message) -> None:
    with pytest.raises(ValidationError, match=message):
        Task(id=task_id, user_id=user_id, name=name)


def test_task_starts_open_and_completes() -> None:
    task = Task(id="t1", user_id="u1", name="buy milk")
    assert task.completed is False

    done = task.complete()
    assert done.completed is True
    assert done.complete() == done
    # The original is untouched and completion cannot be undone in place.
    assert task.completed is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        done.completed = False  # type: ignore[misc]
