from .classifier import is_tracked_task_string
from .task_parser import parse_task, serialise_task

__all__ = [
    "is_tracked_task_string",
    "parse_task",
    "serialise_task",
]
