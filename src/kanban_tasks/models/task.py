"""
Core task entity.

A Task is one checklist line of a kanban board, decomposed into fields. The
parser in parsers.task_parser builds it and serialise_task turns it back into
markdown. The entity itself only guards its state transitions:

- ``done`` and ``done_date`` change together through set_done()
- archive() forces completion and moves the task to the archived column
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from kanban_tasks.utils.dates import today_iso

if TYPE_CHECKING:
    from kanban_tasks.config import BoardSettings

ARCHIVED_COLUMN = "archived"


class Task:
    """A single task line parsed from a board file."""

    def __init__(
        self,
        content: str,
        *,
        settings: Optional[BoardSettings] = None,
        indentation: str = "",
        original_marker: str = " ",
        done: bool = False,
        done_date: Optional[str] = None,
        tags: Optional[List[str]] = None,
        column: Optional[str] = None,
        block_link: Optional[str] = None,
        points: Optional[int] = None,
        separator: str = " ",
        trailing_whitespace: str = "",
        tags_before_metadata: bool = False,
        file_path: Optional[Path] = None,
        line_number: int = 0,
    ):
        if settings is None:
            from kanban_tasks.config import BoardSettings

            settings = BoardSettings()
        self.content = content
        self.settings = settings
        self.indentation = indentation
        self.original_marker = original_marker
        self.tags: List[str] = list(tags or [])
        self.column = column
        self.block_link = block_link
        self.points = points
        # Layout details of the source line, reproduced on write-back
        self.separator = separator
        self.trailing_whitespace = trailing_whitespace
        self.tags_before_metadata = tags_before_metadata
        self.file_path = file_path
        self.line_number = line_number
        self._done = done
        # A parsed line may carry a date token whatever its status
        self._done_date = done_date

    def __repr__(self) -> str:
        return (
            f"Task(content={self.content!r}, done={self._done}, "
            f"column={self.column!r}, tags={self.tags!r})"
        )

    @property
    def done(self) -> bool:
        return self._done

    @done.setter
    def done(self, value: bool) -> None:
        self.set_done(value)

    @property
    def done_date(self) -> Optional[str]:
        """Completion date (YYYY-MM-DD). Only set_done() changes it."""
        return self._done_date

    @property
    def ref(self) -> Optional[str]:
        """Source reference in 'path:line' format, or None if unavailable."""
        if self.file_path:
            return f"{Path(self.file_path).as_posix()}:{self.line_number}"
        return None

    @property
    def column_name(self) -> Optional[str]:
        """Display name of the column, from the settings' column table."""
        return self.settings.column_name(self.column)

    def set_done(self, done: bool, on: Optional[date] = None) -> None:
        """
        Change completion status and reconcile the completion date.

        Completing an open task stamps today's date (or ``on``) unless a date
        is already recorded. Reopening a task always clears the date.
        """
        if done:
            if not self._done and self._done_date is None:
                self._done_date = on.isoformat() if on else today_iso()
            self._done = True
        else:
            self._done = False
            self._done_date = None

    def archive(self, on: Optional[date] = None) -> None:
        """Mark the task done and move it to the archived column."""
        self.set_done(True, on=on)
        self.column = ARCHIVED_COLUMN

    def serialise(self) -> str:
        from kanban_tasks.parsers.task_parser import serialise_task

        return serialise_task(self)

    def to_dict(self) -> dict:
        """JSON-serializable view of the task."""
        return {
            "content": self.content,
            "done": self._done,
            "done_date": self._done_date,
            "marker": self.original_marker,
            "indentation": self.indentation,
            "tags": list(self.tags),
            "column": self.column,
            "column_name": self.column_name,
            "block_link": self.block_link,
            "points": self.points,
            "ref": self.ref,
        }
