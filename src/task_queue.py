"""Queue logic: holds the task collection, id management, mutation and ordering.

Queue position is derived data. It is recomputed from (priority, created_at)
every time the collection is saved and is only meaningful for pending tasks;
in_progress/completed tasks keep whatever stale value they last had.
"""
from datetime import datetime
from typing import Dict, List, Optional, Iterator, Mapping, Any
from models import Task, STATUSES, PENDING, IN_PROGRESS, COMPLETED, DEFAULT_PRIORITY, DEFAULT_DURATION
from errors import TaskNotFound
import logging, re

logger = logging.getLogger(__name__)

# older tool versions wrote nanosecond fractions and a trailing "Z"
_FRACTION_RE = re.compile(r"\.(\d+)")
ZERO_TIME_YEAR = 1


def now() -> datetime:
    return datetime.now().astimezone()


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse an ISO-8601 / RFC 3339 timestamp into an aware datetime.

    Returns None for null/empty values. Raises ValueError for anything else
    that does not parse.
    """
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise ValueError(f"invalid timestamp: {raw!r}")
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


class TaskQueue:
    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self.tasks: List[Task] = []
        self.next_id: int = 1
        if data:
            self._load_from_dict(data)

    # -------------------- loading / migration --------------------
    def _load_from_dict(self, data: Mapping[str, Any]) -> None:
        """Build tasks from a decoded document; raises ValueError on bad shape."""
        raw_tasks = data.get('tasks') or []
        if not isinstance(raw_tasks, list):
            raise ValueError("'tasks' must be a list")
        seen: set = set()
        for raw in raw_tasks:
            task = self._task_from_dict(raw)
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id}")
            seen.add(task.id)
            self.tasks.append(task)
        stored_next = data.get('next_id', 1)
        if not isinstance(stored_next, int) or isinstance(stored_next, bool):
            raise ValueError("'next_id' must be an integer")
        # the counter only moves forward, even if the document disagrees
        highest = max(seen, default=0)
        self.next_id = max(stored_next, highest + 1, 1)

    @staticmethod
    def _task_from_dict(raw: Mapping[str, Any]) -> Task:
        if not isinstance(raw, Mapping):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")
        tid = raw['id']
        if not isinstance(tid, int) or isinstance(tid, bool) or tid < 1:
            raise ValueError(f"invalid task id {tid!r}")
        created_at = parse_timestamp(raw.get('created_at'))
        if created_at is None:
            raise ValueError(f"task #{tid} has no created_at")
        completed_at = parse_timestamp(raw.get('completed_at'))
        if completed_at is not None and completed_at.year == ZERO_TIME_YEAR:
            completed_at = None
        status = raw.get('status', PENDING)
        if status not in STATUSES:
            raise ValueError(f"task #{tid} has unknown status {status!r}")
        return Task(
            id=tid,
            description=str(raw['description']),
            requester=str(raw.get('requester') or ''),
            created_at=created_at,
            completed_at=completed_at,
            estimated_duration=int(raw['estimated_duration']),
            priority=int(raw['priority']),
            status=status,
            position=int(raw.get('position') or 0),
        )

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self.next_id
        self.next_id += 1
        return nid

    # -------------------- queries --------------------
    def find(self, task_id: int) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise TaskNotFound(task_id)

    def filter_by_status(self, status: str = '') -> List[Task]:
        """Tasks in collection order; '' and 'all' mean no filtering."""
        if status in ('', 'all'):
            return list(self.tasks)
        return [t for t in self.tasks if t.status == status]

    def pending_in_queue_order(self) -> List[Task]:
        return sorted((t for t in self.tasks if t.is_pending), key=lambda t: t.position)

    def status_counts(self) -> Dict[str, int]:
        counts = {status: 0 for status in STATUSES}
        for task in self.tasks:
            counts[task.status] += 1
        return counts

    def pending_minutes(self) -> int:
        return sum(t.estimated_duration for t in self.tasks if t.is_pending)

    # -------------------- ordering --------------------
    def update_positions(self) -> None:
        """Rank pending tasks by priority (1 first), then creation time.

        sorted() is stable, so exact ties keep collection order.
        """
        pending = [t for t in self.tasks if t.is_pending]
        pending.sort(key=lambda t: (t.priority, t.created_at))
        for position, task in enumerate(pending, start=1):
            task.position = position

    def wait_time(self, position: int) -> int:
        """Minutes of pending work ranked strictly ahead of `position`.

        Positions must be fresh (call update_positions first).
        """
        return sum(t.estimated_duration for t in self.tasks
                   if t.is_pending and t.position < position)

    # -------------------- task operations --------------------
    def add_task(self, description: str, requester: str = '', priority: int = DEFAULT_PRIORITY,
                 estimated_duration: int = DEFAULT_DURATION, created_at: Optional[datetime] = None) -> Task:
        task = Task(
            id=self._allocate_id(),
            description=description,
            requester=requester,
            created_at=created_at or now(),
            estimated_duration=estimated_duration,
            priority=priority,
            status=PENDING,
        )
        self.tasks.append(task)
        logger.debug("Task added id=%s priority=%s duration=%s", task.id, priority, estimated_duration)
        return task

    def start_task(self, task_id: int) -> Task:
        task = self.find(task_id)
        task.status = IN_PROGRESS
        return task

    def complete_task(self, task_id: int, completed_at: Optional[datetime] = None) -> Task:
        task = self.find(task_id)
        task.status = COMPLETED
        task.completed_at = completed_at or now()
        return task

    def set_estimate(self, task_id: int, minutes: int) -> Task:
        task = self.find(task_id)
        task.estimated_duration = minutes
        return task

    def remove_task(self, task_id: int) -> Task:
        task = self.find(task_id)
        self.tasks.remove(task)
        return task

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        data: List[Dict[str, Any]] = []
        for task in self.tasks:
            entry: Dict[str, Any] = {
                'id': task.id,
                'description': task.description,
                'requester': task.requester,
                'created_at': task.created_at.isoformat(),
            }
            if task.completed_at is not None:
                entry['completed_at'] = task.completed_at.isoformat()
            entry.update({
                'estimated_duration': task.estimated_duration,
                'priority': task.priority,
                'status': task.status,
                'position': task.position,
            })
            data.append(entry)
        return {'tasks': data, 'next_id': self.next_id}

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def __str__(self) -> str:
        counts = self.status_counts()
        return (f'Pending: {counts[PENDING]} tasks, '
                f'In-Progress: {counts[IN_PROGRESS]} tasks, '
                f'Completed: {counts[COMPLETED]} tasks')
