"""Plain-text tables and summaries for the list, queue and add commands.

Renderers return lines instead of printing so the CLI decides where they go.
Cells are padded before colouring so ANSI codes never break alignment.
"""
from typing import List
from durations import format_duration
from models import Task, PENDING, IN_PROGRESS, COMPLETED
from task_queue import TaskQueue
from theme import color, HEADER_COLOR, STATUS_COLOR, ID_COLOR, EMPTY_COLOR, BOLD

LIST_HEADER = "ID | Queue Pos | Priority |  Status  | Est. Duration | Requester | Description"
LIST_RULE = "---|-----------|----------|----------|---------------|-----------|------------"
QUEUE_HEADER = "Position | ID | Priority | Est. Duration | Est. Wait | Requester | Description"
QUEUE_RULE = "---------|----|---------:|---------------|-----------|-----------|------------"


def added_lines(queue: TaskQueue, task: Task) -> List[str]:
    wait = format_duration(queue.wait_time(task.position))
    return [
        f"Added task #{task.id}: {task.description}",
        f"Queue position: {task.position}",
        f"Estimated wait time: {wait}",
    ]


def list_lines(tasks: List[Task]) -> List[str]:
    lines = [color(LIST_HEADER, HEADER_COLOR, BOLD), color(LIST_RULE, HEADER_COLOR)]
    if not tasks:
        lines.append(color("(no tasks)", EMPTY_COLOR))
        return lines
    for task in tasks:
        pos = str(task.position) if task.status == PENDING else '-'
        status_cell = color(f"{task.status:>8}", STATUS_COLOR.get(task.status, ''))
        lines.append(
            f"{color(f'{task.id:>2}', ID_COLOR)} | {pos:>9} | {task.priority:>8} | {status_cell} | "
            f"{task.estimated_duration:>13} | {task.requester:>9} | {task.description}"
        )
    return lines


def queue_lines(queue: TaskQueue) -> List[str]:
    counts = queue.status_counts()
    lines = [
        "Queue Status Summary:",
        f"- Pending tasks: {counts[PENDING]}",
        f"- In progress tasks: {counts[IN_PROGRESS]}",
        f"- Completed tasks: {counts[COMPLETED]}",
        f"- Total estimated wait time: {format_duration(queue.pending_minutes())}",
    ]
    pending = queue.pending_in_queue_order()
    if not pending:
        return lines
    lines.extend(["", "Current Queue:", color(QUEUE_HEADER, HEADER_COLOR, BOLD), color(QUEUE_RULE, HEADER_COLOR)])
    for task in pending:
        wait = format_duration(queue.wait_time(task.position))
        lines.append(
            f"{task.position:>8} | {color(f'{task.id:>2}', ID_COLOR)} | {task.priority:>8} | "
            f"{format_duration(task.estimated_duration):>13} | {wait:>9} | {task.requester:>9} | {task.description}"
        )
    return lines
