"""
Decides whether a markdown line is a task the board tracks.

A tracked line is a checklist item ``- [<status>] ...`` whose status is not
one of the ignored markers. Wiki-links (``- [[note]]``) and markdown links
(``- [x](url)``) look similar and are rejected.
"""

import re
from typing import Optional, Union

from kanban_tasks.models.markers import MarkerSet, create_ignored_status_markers

# indent, bracketed status, then whatever follows the closing bracket. The
# status may be any bracket content; only membership in the marker sets gives
# it a meaning.
TASK_LINE_RE = re.compile(
    r"^(?P<indent>[ \t]*)- \[(?P<status>[^\[\]]+)\](?![\[(])(?P<body>.*)$"
)


def match_task_line(line: str) -> Optional[re.Match]:
    """Match the checklist shape of a line, ignoring marker configuration."""
    return TASK_LINE_RE.match(line)


def is_tracked_task_string(
    line: str,
    ignored_markers: Union[MarkerSet, str, None] = None,
) -> bool:
    """
    Return True if ``line`` is a checklist item the board should track.

    Args:
        line: A single line of markdown
        ignored_markers: Statuses that exclude a line from tracking, either a
            MarkerSet or marker text (validated; invalid text raises
            MarkerConfigError)
    """
    m = match_task_line(line)
    if not m:
        return False
    if ignored_markers is None:
        return True
    if isinstance(ignored_markers, str):
        ignored_markers = create_ignored_status_markers(ignored_markers)
    return m.group("status") not in ignored_markers
