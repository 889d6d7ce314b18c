"""Exception types raised by the queue, the store and the command layer.

Every error carries a message that is shown to the user as-is; the CLI turns
any TaskQueueError into a stderr line and exit code 1.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Union


class TaskQueueError(Exception):
    """Base exception for all user-facing failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInput(TaskQueueError):
    """Raised for non-numeric ids, bad durations and unknown status filters."""


class TaskNotFound(TaskQueueError):
    """No task carries the requested id."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found")


class StorageError(TaskQueueError):
    """The tasks file could not be read, parsed or written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)
