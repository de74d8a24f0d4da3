"""Parse, mutate and serialise kanban checklist lines."""

from .config import BoardSettings
from .models import ARCHIVED_COLUMN, MarkerConfigError, MarkerSet, Task
from .parsers import is_tracked_task_string, parse_task, serialise_task

__version__ = "0.1.0"

__all__ = [
    "ARCHIVED_COLUMN",
    "BoardSettings",
    "MarkerConfigError",
    "MarkerSet",
    "Task",
    "is_tracked_task_string",
    "parse_task",
    "serialise_task",
]
