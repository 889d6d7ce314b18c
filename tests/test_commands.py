from __future__ import annotations

import pytest

import commands
from conftest import at
from errors import InvalidInput, TaskNotFound
from models import COMPLETED, DEFAULT_DURATION, DEFAULT_PRIORITY, IN_PROGRESS


@pytest.mark.parametrize(
    "priority, duration, expected",
    [
        ("1", "45", (1, 45)),
        ("5", "1", (5, 1)),
        ("0", "0", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        ("6", "-10", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        ("high", "soon", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        ("", "", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        ("1_0", "1_000", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        ("\uff13", "\uff13\uff10", (DEFAULT_PRIORITY, DEFAULT_DURATION)),
        (2, 90, (2, 90)),
    ],
)
def test_add_falls_back_to_defaults(queue, priority, duration, expected):
    task = commands.add(queue, "task", "", priority, duration)
    assert (task.priority, task.estimated_duration) == expected


def test_add_rejects_blank_description(queue):
    with pytest.raises(InvalidInput):
        commands.add(queue, "   ")
    assert queue.next_id == 1


def test_add_keeps_requester_and_pending_status(queue):
    task = commands.add(queue, "  fix printer ", "alice")
    assert task.description == "fix printer"
    assert task.requester == "alice"
    assert task.status == "pending"
    assert task.completed_at is None


def test_id_parsing(queue):
    commands.add(queue, "a")
    assert commands.start(queue, " 1 ").status == IN_PROGRESS
    with pytest.raises(InvalidInput) as exc:
        commands.complete(queue, "abc")
    assert exc.value.message == "Invalid task ID: abc"


@pytest.mark.parametrize("raw", ["1_0", "\uff11", "0x1", "1e1"])
def test_id_must_be_plain_ascii_digits(queue, raw):
    for name in "abcdefghijk":
        commands.add(queue, name)
    with pytest.raises(InvalidInput) as exc:
        commands.complete(queue, raw)
    assert exc.value.message == f"Invalid task ID: {raw}"
    assert all(t.status == "pending" for t in queue.tasks)


@pytest.mark.parametrize("raw", ["0", "-5", "ten", "1.5", "1_0", "\uff13"])
def test_estimate_rejects_bad_duration(queue, raw):
    commands.add(queue, "a")
    with pytest.raises(InvalidInput) as exc:
        commands.estimate(queue, "1", raw)
    assert exc.value.message == f"Invalid duration: {raw}"
    assert queue.find(1).estimated_duration == DEFAULT_DURATION


def test_estimate_overwrites_duration(queue):
    commands.add(queue, "a")
    assert commands.estimate(queue, "1", "75").estimated_duration == 75
    with pytest.raises(TaskNotFound):
        commands.estimate(queue, "2", "75")


def test_list_filter_validation(queue):
    commands.add(queue, "a")
    commands.add(queue, "b")
    commands.complete(queue, "2")

    assert [t.id for t in commands.list_tasks(queue, COMPLETED)] == [2]
    assert len(commands.list_tasks(queue, "all")) == 2
    with pytest.raises(InvalidInput):
        commands.list_tasks(queue, "done")


def test_transaction_saves_and_reranks(store, queue):
    commands.add(queue, "low", priority="4")
    task = commands.transaction(store, queue, lambda q: commands.add(q, "high", priority="1"))

    assert task.position == 1
    assert store.load().find(1).position == 2


def test_failed_transaction_leaves_file_untouched(store, queue):
    queue.add_task("keep me", created_at=at(0))
    store.save(queue)
    before = store.path.read_bytes()

    with pytest.raises(TaskNotFound):
        commands.transaction(store, queue, lambda q: commands.remove(q, "99"))

    assert store.path.read_bytes() == before
    assert [t.id for t in store.load().tasks] == [1]
