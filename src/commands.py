"""Command operations: each one is a single load-mutate-save transaction.

Operations take the in-memory TaskQueue and raw user text, mutate the queue
and return the affected task(s). `transaction` runs an operation and saves;
if the operation raises, nothing is written and the file keeps its previous
contents.
"""
import logging
import re
from typing import Callable, List, Optional, TypeVar, Union

from errors import InvalidInput
from models import Task, STATUSES, MIN_PRIORITY, MAX_PRIORITY, DEFAULT_PRIORITY, DEFAULT_DURATION
from storage import TaskStore
from task_queue import TaskQueue

logger = logging.getLogger(__name__)

T = TypeVar('T')
RawInt = Union[str, int, None]
STATUS_FILTERS = ('', 'all') + STATUSES
_INT_RE = re.compile(r"[+-]?[0-9]+")


def transaction(store: TaskStore, queue: TaskQueue, operation: Callable[[TaskQueue], T]) -> T:
    """Apply `operation` to `queue`, then persist (which also re-ranks the queue)."""
    result = operation(queue)
    store.save(queue)
    return result


# -------------------- input parsing --------------------
def _to_int(raw: RawInt) -> int:
    """Plain ASCII base-10 integers only; no underscores or other digit scripts."""
    text = str(raw).strip()
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"not an integer: {raw!r}")
    return int(text)


def parse_task_id(raw: RawInt) -> int:
    try:
        return _to_int(raw)
    except ValueError:
        raise InvalidInput(f"Invalid task ID: {raw}") from None


def parse_duration(raw: RawInt) -> int:
    try:
        minutes = _to_int(raw)
    except ValueError:
        raise InvalidInput(f"Invalid duration: {raw}") from None
    if minutes <= 0:
        raise InvalidInput(f"Invalid duration: {raw}")
    return minutes


def lenient_int(raw: RawInt, default: int, low: int, high: Optional[int] = None) -> int:
    """Parse `raw`, falling back to `default` when it is not an int within [low, high]."""
    try:
        value = _to_int(raw)
    except ValueError:
        return default
    if value < low or (high is not None and value > high):
        return default
    return value


# -------------------- operations --------------------
def add(queue: TaskQueue, description: str, requester: str = '',
        priority: RawInt = DEFAULT_PRIORITY, duration: RawInt = DEFAULT_DURATION) -> Task:
    description = description.strip()
    if not description:
        raise InvalidInput("Task description required")
    prio = lenient_int(priority, DEFAULT_PRIORITY, MIN_PRIORITY, MAX_PRIORITY)
    minutes = lenient_int(duration, DEFAULT_DURATION, 1)
    logger.debug("add: priority %r -> %d, duration %r -> %d", priority, prio, duration, minutes)
    return queue.add_task(description, requester or '', prio, minutes)


def list_tasks(queue: TaskQueue, status: str = '') -> List[Task]:
    status = (status or '').strip()
    if status not in STATUS_FILTERS:
        raise InvalidInput(f"Invalid status filter: {status}")
    return queue.filter_by_status(status)


def complete(queue: TaskQueue, raw_id: RawInt) -> Task:
    return queue.complete_task(parse_task_id(raw_id))


def start(queue: TaskQueue, raw_id: RawInt) -> Task:
    return queue.start_task(parse_task_id(raw_id))


def estimate(queue: TaskQueue, raw_id: RawInt, raw_duration: RawInt) -> Task:
    task_id = parse_task_id(raw_id)
    minutes = parse_duration(raw_duration)
    return queue.set_estimate(task_id, minutes)


def remove(queue: TaskQueue, raw_id: RawInt) -> Task:
    return queue.remove_task(parse_task_id(raw_id))
