from .markers import (
    DEFAULT_DONE_STATUS_MARKERS,
    DEFAULT_IGNORED_STATUS_MARKERS,
    MarkerConfigError,
    MarkerSet,
    create_done_status_markers,
    create_ignored_status_markers,
    validate_done_status_markers,
    validate_ignored_status_markers,
)
from .task import ARCHIVED_COLUMN, Task

__all__ = [
    "ARCHIVED_COLUMN",
    "DEFAULT_DONE_STATUS_MARKERS",
    "DEFAULT_IGNORED_STATUS_MARKERS",
    "MarkerConfigError",
    "MarkerSet",
    "Task",
    "create_done_status_markers",
    "create_ignored_status_markers",
    "validate_done_status_markers",
    "validate_ignored_status_markers",
]
