"""
Status marker sets.

A marker set is the ordered list of symbols that may appear between the
checklist brackets (``- [x]``) with a special meaning. Two sets exist:

- done markers: the task is complete (default ``xX``)
- ignored markers: the line is not tracked at all (default: none)

Each marker is one grapheme cluster, i.e. one user-visible character. A flag
emoji or a letter followed by a combining accent is a single marker even
though it spans several code points.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import regex

DEFAULT_DONE_STATUS_MARKERS = "xX"
DEFAULT_IGNORED_STATUS_MARKERS = ""

_GRAPHEME = regex.compile(r"\X")


class MarkerConfigError(ValueError):
    """Raised when marker text fails validation. Carries every violation."""

    def __init__(self, kind: str, violations: List[str]):
        self.kind = kind
        self.violations = list(violations)
        super().__init__(f"Invalid {kind} status markers: {'; '.join(self.violations)}")


def split_graphemes(text: str) -> List[str]:
    """Split text into grapheme clusters."""
    return _GRAPHEME.findall(text)


def _is_control(cluster: str) -> bool:
    return any(unicodedata.category(ch) == "Cc" for ch in cluster)


def validate_status_markers(text: str) -> List[str]:
    """
    Return all violations found in a marker string.

    Every cluster is checked for whitespace, control characters and
    duplication independently, so a tab reports both as whitespace and as a
    control character. Positions are 1-based cluster indexes.
    """
    errors: List[str] = []
    seen = set()
    for position, cluster in enumerate(split_graphemes(text), start=1):
        if cluster.isspace():
            errors.append(f"Marker at position {position} is whitespace")
        if _is_control(cluster):
            errors.append(f"Marker at position {position} is a control character")
        if cluster in seen:
            errors.append(f"Duplicate marker '{cluster}' at position {position}")
        seen.add(cluster)
    return errors


def validate_done_status_markers(text: str) -> List[str]:
    if not text:
        return ["Done status markers cannot be empty"]
    return validate_status_markers(text)


def validate_ignored_status_markers(text: str) -> List[str]:
    # An empty string means "ignore nothing"
    return validate_status_markers(text)


@dataclass(frozen=True)
class MarkerSet:
    """Immutable, ordered set of status markers."""

    markers: Tuple[str, ...] = ()

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.markers

    def __iter__(self) -> Iterator[str]:
        return iter(self.markers)

    def __len__(self) -> int:
        return len(self.markers)

    def __str__(self) -> str:
        return "".join(self.markers)

    @property
    def first(self) -> Optional[str]:
        """The canonical marker: the first one configured."""
        return self.markers[0] if self.markers else None


def create_done_status_markers(text: str) -> MarkerSet:
    errors = validate_done_status_markers(text)
    if errors:
        raise MarkerConfigError("done", errors)
    return MarkerSet(tuple(split_graphemes(text)))


def create_ignored_status_markers(text: str) -> MarkerSet:
    errors = validate_ignored_status_markers(text)
    if errors:
        raise MarkerConfigError("ignored", errors)
    return MarkerSet(tuple(split_graphemes(text)))
