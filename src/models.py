"""Data models for the task queue.

Exposes the Task dataclass plus the status keys and input defaults shared by
the queue, the store and the CLI. Status keys are stored verbatim in the
JSON document ("pending", "in_progress", "completed").
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

PENDING = "pending"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
STATUSES: Tuple[str, ...] = (PENDING, IN_PROGRESS, COMPLETED)

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = 3
DEFAULT_DURATION = 30  # minutes

@dataclass
class Task:
    """A single queued task.

    Fields:
        id: Unique integer id, never reused after removal.
        description: Free text describing the work.
        requester: Who asked for it (empty string when nobody in particular).
        created_at: Timezone-aware creation time; breaks priority ties.
        completed_at: Set when the task is completed, None otherwise.
        estimated_duration: Minutes, always positive.
        priority: 1 (highest) to 5 (lowest).
        status: One of STATUSES.
        position: 1-based queue rank; only meaningful while pending.
    """
    id: int
    description: str
    created_at: datetime
    requester: str = ""
    completed_at: Optional[datetime] = None
    estimated_duration: int = DEFAULT_DURATION
    priority: int = DEFAULT_PRIORITY
    status: str = PENDING
    position: int = 0

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    def __repr__(self) -> str:
        return f"Task(id={self.id}, priority={self.priority}, status={self.status}, position={self.position})"
