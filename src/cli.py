"""Command-line interface for the task queue.

One command per invocation: the callback loads the store once, the command
applies a single transaction, and any TaskQueueError ends the process with a
message on stderr and exit code 1 (nothing is saved in that case).
"""
import logging
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, TypeVar

import typer

import commands
import report
from config import Settings
from errors import TaskQueueError
from logging_setup import level_from_name, setup_logging
from storage import TaskStore
from task_queue import TaskQueue

logger = logging.getLogger(__name__)

T = TypeVar('T')

app = typer.Typer(
    add_completion=False,
    help="A simple todo list manager with a queue system",
)


def _fail(error: TaskQueueError) -> NoReturn:
    logger.debug("Command failed: %s", error.message, exc_info=error)
    typer.echo(error.message, err=True)
    raise typer.Exit(code=1)


def _echo_lines(lines: List[str]) -> None:
    for line in lines:
        typer.echo(line)


def _queue(ctx: typer.Context) -> TaskQueue:
    return ctx.obj["queue"]


def _transact(ctx: typer.Context, operation: Callable[[TaskQueue], T]) -> T:
    try:
        return commands.transaction(ctx.obj["store"], ctx.obj["queue"], operation)
    except TaskQueueError as e:
        _fail(e)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Tasks file (default: $TODO_TASKS_FILE or ~/.tasks.json)"
    ),
) -> None:
    """A simple todo list manager with a queue system."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    settings = Settings.from_env()
    setup_logging(console_level=level_from_name(settings.log_level), log_file=settings.log_file)
    path = Path(file).expanduser() if file else settings.tasks_file
    store = TaskStore(path)
    try:
        queue = store.load()
    except TaskQueueError as e:
        _fail(e)
    ctx.obj = {"store": store, "queue": queue}


@app.command()
def add(
    ctx: typer.Context,
    description: List[str] = typer.Argument(..., help="Task description"),
    requester: str = typer.Option("", "--requester", "-r", help="Person who requested this task"),
    priority: str = typer.Option("3", "--priority", "-p", help="Priority (1-5, where 1 is highest)"),
    duration: str = typer.Option("30", "--duration", "-d", help="Estimated duration in minutes"),
) -> None:
    """Add a new task to the queue."""
    text = " ".join(description)
    task = _transact(ctx, lambda q: commands.add(q, text, requester, priority, duration))
    _echo_lines(report.added_lines(_queue(ctx), task))


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    status: str = typer.Option(
        "", "--status", "-s", help="Filter by status (pending/in_progress/completed/all)"
    ),
) -> None:
    """List all tasks."""
    try:
        tasks = commands.list_tasks(_queue(ctx), status)
    except TaskQueueError as e:
        _fail(e)
    _echo_lines(report.list_lines(tasks))


@app.command()
def complete(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task id")) -> None:
    """Mark a task as completed."""
    task = _transact(ctx, lambda q: commands.complete(q, task_id))
    typer.echo(f"Marked task #{task.id} as completed")


@app.command()
def start(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task id")) -> None:
    """Mark a task as in progress."""
    task = _transact(ctx, lambda q: commands.start(q, task_id))
    typer.echo(f"Started working on task #{task.id}")


@app.command()
def estimate(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    duration: str = typer.Argument(..., help="New estimate in minutes"),
) -> None:
    """Update the estimated duration for a task (in minutes)."""
    task = _transact(ctx, lambda q: commands.estimate(q, task_id, duration))
    typer.echo(f"Updated estimated duration for task #{task.id} to {task.estimated_duration} minutes")


def remove(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task id")) -> None:
    """Remove a task from the list."""
    task = _transact(ctx, lambda q: commands.remove(q, task_id))
    typer.echo(f"Removed task #{task.id}: {task.description}")
    typer.echo("Queue positions have been updated")


app.command("remove")(remove)
app.command("cancel", hidden=True)(remove)
app.command("delete", hidden=True)(remove)


@app.command("queue")
def queue_cmd(ctx: typer.Context) -> None:
    """Show current queue information."""
    _echo_lines(report.queue_lines(_queue(ctx)))

