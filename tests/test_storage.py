from __future__ import annotations

import json

import pytest

from conftest import at
from errors import StorageError
from storage import TaskStore


def test_missing_file_is_created_empty(store, tasks_file):
    queue = store.load()

    assert len(queue) == 0
    assert queue.next_id == 1
    assert json.loads(tasks_file.read_text()) == {"tasks": [], "next_id": 1}


def test_save_then_load_round_trips(store, queue):
    queue.add_task("write report", requester="bob", priority=2, estimated_duration=45, created_at=at(0))
    queue.add_task("call alice", priority=1, estimated_duration=15, created_at=at(5))
    queue.add_task("ship it", created_at=at(9))
    queue.complete_task(3, completed_at=at(60))
    queue.remove_task(1)
    store.save(queue)

    loaded = store.load()

    assert loaded.tasks == queue.tasks
    assert loaded.next_id == queue.next_id == 4


def test_save_recomputes_positions(store, queue):
    queue.add_task("low", priority=5, created_at=at(0))
    queue.add_task("high", priority=1, created_at=at(1))
    store.save(queue)

    stored = {t["id"]: t["position"] for t in json.loads(store.path.read_text())["tasks"]}
    assert stored == {1: 2, 2: 1}


def test_completed_at_only_written_for_completed_tasks(store, queue):
    queue.add_task("open", created_at=at(0))
    queue.add_task("closed", created_at=at(1))
    queue.complete_task(2, completed_at=at(30))
    store.save(queue)

    open_entry, closed_entry = json.loads(store.path.read_text())["tasks"]
    assert "completed_at" not in open_entry
    assert closed_entry["completed_at"] == at(30).isoformat()
    assert closed_entry["status"] == "completed"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"tasks": {"id": 1}, "next_id": 1}',
        '{"tasks": [{"id": 1}], "next_id": 2}',
        '{"tasks": [], "next_id": "two"}',
    ],
)
def test_unparseable_file_raises_storage_error(tasks_file, content):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(content)

    with pytest.raises(StorageError) as exc:
        TaskStore(tasks_file).load()
    assert exc.value.message.startswith("Error parsing tasks file")
    assert exc.value.path == tasks_file
    # a broken file is never overwritten
    assert tasks_file.read_text() == content


def test_unreadable_file_raises_storage_error(tmp_path):
    directory = tmp_path / "tasks.json"
    directory.mkdir()

    with pytest.raises(StorageError) as exc:
        TaskStore(directory).load()
    assert exc.value.message.startswith("Error reading tasks file")


def test_unwritable_path_raises_storage_error(tmp_path, queue):
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with pytest.raises(StorageError) as exc:
        TaskStore(blocker / "tasks.json").save(queue)
    assert exc.value.message.startswith("Error writing tasks file")
