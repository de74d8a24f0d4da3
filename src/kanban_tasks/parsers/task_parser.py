"""
Parser and serializer for kanban task lines.

Main API:
    parse_task(line, settings)  → Task
    serialise_task(task)        → str

Parsing runs a fixed sequence of extractors over the text that follows the
checkbox. Each extractor takes the current remainder and returns the value it
found plus a shorter remainder:

    block link → tags / column → points → done date → content

The order matters: serialise_task emits the tokens back in the mirrored
layout, and the separator after the checkbox plus any trailing whitespace
are kept, so an unmutated line survives parse → serialise unchanged.

Tags written before any points or done-date token stay part of the content
(``Fix #bug today``, ``Something #tag``). Tags that trail those tokens are
metadata and are pulled out; with consolidate_tags every tag is pulled out.
On write-back, the run of tags that ends the content is placed after the
points and done-date tokens, so completing ``Task #tag`` gives
``Task ✅ <date> #tag``. A line that already had points or a date after
such tags (``Buy milk #shopping $5``) keeps its order. Tags in the middle of
the prose keep their place.
"""

import re
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from kanban_tasks.config import BoardSettings
from kanban_tasks.models.task import Task
from kanban_tasks.parsers.classifier import match_task_line
from kanban_tasks.utils.dates import ISO_DATE_PATTERN
from kanban_tasks.utils.formatting import (
    DONE_DATE_EMOJI,
    render_block_link,
    render_done_date,
    render_points,
    render_tag,
)

BLOCK_LINK_RE = re.compile(r"(?<!\S)\^(?P<link>\S+)\s*$")
TAG_RE = re.compile(r"(?<!\S)#(?P<tag>[\w/-]+)(?!\S)")
TRAILING_TAG_RE = re.compile(r"(?:^|\s+)#(?P<tag>[\w/-]+)\s*$")
POINTS_RE = re.compile(r"(?<!\S)\$(?P<points>\d+)(?!\S)")
DONE_DATE_RE = re.compile(rf"(?<!\S){DONE_DATE_EMOJI} (?P<date>{ISO_DATE_PATTERN})(?!\S)")
WIKI_LINK_RE = re.compile(r"\[\[.*?\]\]")


class Extracted(NamedTuple):
    value: object
    remainder: str


class TagExtraction(NamedTuple):
    tags: List[str]
    column: Optional[str]
    remainder: str


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------

def _mask_wiki_links(text: str) -> str:
    """Blank out [[...]] bodies with equal-length spaces so positions stay aligned."""
    return WIKI_LINK_RE.sub(lambda m: " " * len(m.group()), text)


def _cut(text: str, spans: Sequence[Tuple[int, int]]) -> str:
    """
    Remove token spans from text along with the whitespace that separated
    each token from its left neighbour.
    """
    for start, end in sorted(spans, reverse=True):
        while start > 0 and text[start - 1].isspace():
            start -= 1
        if start == 0:
            while end < len(text) and text[end].isspace():
                end += 1
        text = text[:start] + text[end:]
    return text


def _metadata_start(text: str) -> int:
    """Position of the first points or done-date token, or len(text)."""
    positions = [m.start() for m in (POINTS_RE.search(text), DONE_DATE_RE.search(text)) if m]
    return min(positions, default=len(text))


def has_inline_tag(content: str, tag: str) -> bool:
    """True if ``#tag`` appears as a standalone token in the content."""
    return any(m.group("tag") == tag for m in TAG_RE.finditer(_mask_wiki_links(content)))


def split_trailing_tags(content: str) -> Tuple[str, List[str]]:
    """Split content into (prose, tags) where tags is the run of #tags ending it."""
    tags: List[str] = []
    m = TRAILING_TAG_RE.search(content)
    while m:
        tags.insert(0, m.group("tag"))
        content = content[: m.start()]
        m = TRAILING_TAG_RE.search(content)
    return content, tags


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def extract_block_link(text: str) -> Extracted:
    m = BLOCK_LINK_RE.search(_mask_wiki_links(text))
    if not m:
        return Extracted(None, text)
    return Extracted(m.group("link"), _cut(text, [m.span()]))


def extract_tags(
    text: str,
    column_tags: Dict[str, str],
    done: bool,
    consolidate_tags: bool = False,
) -> TagExtraction:
    """
    Collect ``#tags`` and resolve the column tag.

    The first tag found in ``column_tags`` is the column tag; it is always
    removed from the text, but a done task does not keep a column. Any later
    column-resolving tag is treated as an ordinary tag.
    """
    masked = _mask_wiki_links(text)
    boundary = _metadata_start(masked)

    tags: List[str] = []
    column: Optional[str] = None
    column_found = False
    spans: List[Tuple[int, int]] = []

    for m in TAG_RE.finditer(masked):
        tag = m.group("tag")
        if not column_found and tag in column_tags:
            column_found = True
            column = None if done else tag
            spans.append(m.span())
            continue
        if tag not in tags:
            tags.append(tag)
        if consolidate_tags or m.start() >= boundary:
            spans.append(m.span())

    return TagExtraction(tags, column, _cut(text, spans))


def extract_points(text: str) -> Extracted:
    m = POINTS_RE.search(text)
    if not m:
        return Extracted(None, text)
    return Extracted(int(m.group("points")), _cut(text, [m.span()]))


def extract_done_date(text: str) -> Extracted:
    m = DONE_DATE_RE.search(text)
    if not m:
        return Extracted(None, text)
    return Extracted(m.group("date"), _cut(text, [m.span()]))


# ---------------------------------------------------------------------------
# Main parse / serialise API
# ---------------------------------------------------------------------------

def parse_task(
    line: str,
    settings: Optional[BoardSettings] = None,
    file_path: Optional[Path] = None,
    line_number: int = 0,
) -> Task:
    """
    Parse a tracked task line into a Task.

    Args:
        line: A single markdown line accepted by is_tracked_task_string
        settings: Board configuration snapshot (defaults if omitted)
        file_path: Source file, kept for diagnostics only
        line_number: Zero-based line offset in the source file

    Raises:
        ValueError: if the line is not a tracked task line
    """
    settings = settings or BoardSettings()

    m = match_task_line(line)
    if not m or m.group("status") in settings.ignored_markers:
        raise ValueError(f"Not a tracked task line: {line!r}")

    status = m.group("status")
    done = status in settings.done_markers
    body = m.group("body")
    stripped = body.rstrip()
    remainder = stripped.lstrip()
    separator = stripped[: len(stripped) - len(remainder)] if remainder else " "

    block_link, remainder = extract_block_link(remainder)
    # Tags ending the prose stay put when the line already has metadata after them
    tags_before_metadata = _metadata_start(_mask_wiki_links(remainder)) < len(remainder)
    tags, column, remainder = extract_tags(
        remainder, settings.column_tags, done, settings.consolidate_tags
    )
    points, remainder = extract_points(remainder)
    done_date, remainder = extract_done_date(remainder)

    return Task(
        remainder.strip(),
        settings=settings,
        indentation=m.group("indent"),
        original_marker=status,
        done=done,
        done_date=done_date,
        tags=tags,
        column=column,
        block_link=block_link,
        points=points,
        separator=separator,
        trailing_whitespace=body[len(stripped):],
        tags_before_metadata=tags_before_metadata,
        file_path=file_path,
        line_number=line_number,
    )


def _status_marker(task: Task) -> str:
    """
    Pick the symbol written between the brackets.

    A done task keeps its original marker if that is a configured done marker
    and otherwise falls back to the first one. An open task keeps a marker
    that has no done meaning (e.g. ``?``) and otherwise gets a space.
    """
    done_markers = task.settings.done_markers
    marker = task.original_marker
    if task.done:
        return marker if marker in done_markers else done_markers.first
    if marker and marker not in done_markers:
        return marker
    return " "


def serialise_task(task: Task) -> str:
    """
    Render a Task back to its markdown line.

    Layout: indentation, checkbox, prose, points, done date, tags, column
    tag, block link. The done date is written whenever one is held; set_done()
    keeps it in step with ``done``. The separator after the checkbox and any
    trailing whitespace are written back as parsed.
    """
    if task.tags_before_metadata:
        prose, content_tags = task.content, []
    else:
        prose, content_tags = split_trailing_tags(task.content)

    pieces: List[str] = []
    if prose:
        pieces.append(prose)
    if task.points is not None:
        pieces.append(render_points(task.points))
    if task.done_date:
        pieces.append(render_done_date(task.done_date))
    pieces.extend(render_tag(t) for t in content_tags)
    pieces.extend(render_tag(t) for t in task.tags if not has_inline_tag(task.content, t))
    if task.column:
        pieces.append(render_tag(task.column))
    if task.block_link:
        pieces.append(render_block_link(task.block_link))

    head = f"{task.indentation}- [{_status_marker(task)}]"
    if pieces:
        head = f"{head}{task.separator}{' '.join(pieces)}"
    return head + task.trailing_whitespace
