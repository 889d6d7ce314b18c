# tests/conftest.py

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# theme.py decides on colours at import time; keep table output plain.
os.environ["NO_COLOR"] = "1"
os.environ.pop("FORCE_COLOR", None)

from typer.testing import CliRunner  # noqa: E402

from cli import app  # noqa: E402
from storage import TaskStore  # noqa: E402
from task_queue import TaskQueue  # noqa: E402

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Deterministic creation times: BASE_TIME + minutes."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(tasks_file: Path) -> TaskStore:
    return TaskStore(tasks_file)


@pytest.fixture()
def queue() -> TaskQueue:
    return TaskQueue()


@pytest.fixture()
def invoke(tasks_file: Path, monkeypatch: pytest.MonkeyPatch):
    """
    Run the CLI against a temp tasks file.

    Returns a callable taking the command words, e.g. invoke("add", "x").
    """
    monkeypatch.delenv("TODO_TASKS_FILE", raising=False)
    monkeypatch.delenv("TODO_LOG_FILE", raising=False)
    monkeypatch.setenv("TODO_LOG_LEVEL", "WARNING")
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(app, ["--file", str(tasks_file), *args])

    return _invoke
