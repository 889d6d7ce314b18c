"""Persistence for the task queue: one JSON document holding every task.

Each invocation loads the whole document, mutates it in memory and writes the
whole document back. There is no locking; two invocations racing on the same
file can lose an update.
"""
import json
import logging
from pathlib import Path
from typing import Union

from config import DEFAULT_TASKS_FILE
from errors import StorageError
from task_queue import TaskQueue

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(self, path: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.path = Path(path).expanduser()

    def load(self) -> TaskQueue:
        """Load the queue from disk.

        Missing file -> empty queue (next id 1), written out immediately.
        Unreadable or malformed file -> StorageError.
        """
        if not self.path.exists():
            queue = TaskQueue()
            logger.info("No tasks file at %s, creating an empty one", self.path)
            self.save(queue)
            return queue
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Failed to read %s: %s", self.path, e)
            raise StorageError(f"Error reading tasks file: {e}", self.path) from e
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            queue = TaskQueue(data)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.debug("Failed to parse %s: %s", self.path, e)
            raise StorageError(f"Error parsing tasks file: {e}", self.path) from e
        logger.debug("Loaded %d tasks from %s (next id %d)", len(queue), self.path, queue.next_id)
        return queue

    def save(self, queue: TaskQueue) -> None:
        """Recompute queue positions, then persist the full document (pretty-printed)."""
        queue.update_positions()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(queue.to_dict(), f, indent=2)
                f.write('\n')
        except OSError as e:
            logger.debug("Failed to write %s: %s", self.path, e)
            raise StorageError(f"Error writing tasks file: {e}", self.path) from e
        logger.debug("Saved %d tasks to %s", len(queue), self.path)
