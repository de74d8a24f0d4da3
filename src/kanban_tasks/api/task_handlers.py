"""Task handler functions shared by MCP tools and REST API."""

import logging
from pathlib import Path
from typing import Optional

from kanban_tasks.config import BoardSettings
from kanban_tasks.ledger.points_ledger import PointsLedger, complete_task
from kanban_tasks.models.markers import (
    validate_done_status_markers,
    validate_ignored_status_markers,
)
from kanban_tasks.parsers.classifier import is_tracked_task_string
from kanban_tasks.parsers.task_parser import parse_task, serialise_task
from kanban_tasks.utils.dates import parse_iso_date

log = logging.getLogger(__name__)


def _parse(settings: BoardSettings, line: str, file_path: Optional[str], line_number: int):
    if not is_tracked_task_string(line, settings.ignored_markers):
        return None
    return parse_task(
        line,
        settings,
        file_path=Path(file_path) if file_path else None,
        line_number=line_number,
    )


def handle_task_classify(settings: BoardSettings, *, line: str) -> dict:
    return {"line": line, "tracked": is_tracked_task_string(line, settings.ignored_markers)}


def handle_task_parse(
    settings: BoardSettings,
    *,
    line: str,
    file_path: Optional[str] = None,
    line_number: int = 0,
) -> dict:
    task = _parse(settings, line, file_path, line_number)
    if task is None:
        return {"error": f"Not a tracked task line: {line!r}"}
    result = task.to_dict()
    result["line"] = serialise_task(task)
    return result


def handle_task_update(
    settings: BoardSettings,
    ledger: Optional[PointsLedger],
    *,
    line: str,
    done: Optional[bool] = None,
    column: Optional[str] = None,
    archive: bool = False,
    on: Optional[str] = None,
    file_path: Optional[str] = None,
    line_number: int = 0,
) -> dict:
    """
    Parse a line, apply the requested changes and serialise it again.

    Completion changes settle the task's reward on the ledger. ``column=""``
    clears the column; ``archive`` wins over both ``done`` and ``column``.
    """
    task = _parse(settings, line, file_path, line_number)
    if task is None:
        return {"error": f"Not a tracked task line: {line!r}"}

    on_date = None
    if on:
        on_date = parse_iso_date(on)
        if on_date is None:
            return {"error": f"Invalid date '{on}', expected YYYY-MM-DD"}

    points_delta = 0
    if done is not None:
        points_delta += complete_task(task, done, ledger, on=on_date)
    if column is not None:
        task.column = column or None
    if archive:
        points_delta += complete_task(task, True, ledger, on=on_date)
        task.archive(on=on_date)

    result = task.to_dict()
    result["line"] = serialise_task(task)
    result["points_delta"] = points_delta
    if ledger is not None:
        result["balance"] = ledger.balance
    log.debug("Updated task line %r -> %r", line, result["line"])
    return result


def handle_markers_validate(*, done: Optional[str] = None, ignored: Optional[str] = None) -> dict:
    result: dict = {}
    if done is not None:
        result["done"] = validate_done_status_markers(done)
    if ignored is not None:
        result["ignored"] = validate_ignored_status_markers(ignored)
    result["valid"] = not any(result.values())
    return result


def handle_settings(settings: BoardSettings) -> dict:
    return settings.model_dump()


def handle_points_balance(ledger: PointsLedger) -> dict:
    return {"balance": ledger.balance}


def handle_points_reset(ledger: PointsLedger) -> dict:
    ledger.reset()
    log.info("Points balance reset")
    return {"balance": ledger.balance}
