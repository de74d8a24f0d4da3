"""
Board configuration snapshot.

BoardSettings bundles everything the parser needs: the done and ignored
marker vocabularies, the tag -> column table and the consolidate-tags flag.
Marker text is validated when the settings object is built, so a settings
instance always holds usable marker sets.
"""

import logging
import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from kanban_tasks.models.markers import (
    DEFAULT_DONE_STATUS_MARKERS,
    DEFAULT_IGNORED_STATUS_MARKERS,
    MarkerSet,
    create_done_status_markers,
    create_ignored_status_markers,
)

log = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _parse_column_tags(raw: str) -> Dict[str, str]:
    """
    Parse a comma-separated list of ``tag=Column Name`` pairs.

    A bare ``tag`` maps to itself.
    """
    table: Dict[str, str] = {}
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        tag, _, name = part.partition("=")
        tag = tag.strip().lstrip("#")
        table[tag] = name.strip() or tag
    return table


class BoardSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    done_status_markers: str = DEFAULT_DONE_STATUS_MARKERS
    ignored_status_markers: str = DEFAULT_IGNORED_STATUS_MARKERS
    column_tags: Dict[str, str] = {}
    consolidate_tags: bool = False

    _done_markers: MarkerSet = PrivateAttr()
    _ignored_markers: MarkerSet = PrivateAttr()

    @field_validator("done_status_markers")
    @classmethod
    def _check_done_markers(cls, value: str) -> str:
        create_done_status_markers(value)
        return value

    @field_validator("ignored_status_markers")
    @classmethod
    def _check_ignored_markers(cls, value: str) -> str:
        create_ignored_status_markers(value)
        return value

    def model_post_init(self, __context) -> None:
        self._done_markers = create_done_status_markers(self.done_status_markers)
        self._ignored_markers = create_ignored_status_markers(self.ignored_status_markers)

    @property
    def done_markers(self) -> MarkerSet:
        return self._done_markers

    @property
    def ignored_markers(self) -> MarkerSet:
        return self._ignored_markers

    def column_name(self, column: Optional[str]) -> Optional[str]:
        """Display name for a column tag, if the table knows it."""
        if column is None:
            return None
        return self.column_tags.get(column)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BoardSettings":
        """Build settings from KANBAN_* environment variables."""
        env = os.environ if environ is None else environ
        settings = cls(
            done_status_markers=env.get("KANBAN_DONE_MARKERS", DEFAULT_DONE_STATUS_MARKERS),
            ignored_status_markers=env.get("KANBAN_IGNORED_MARKERS", DEFAULT_IGNORED_STATUS_MARKERS),
            column_tags=_parse_column_tags(env.get("KANBAN_COLUMN_TAGS", "")),
            consolidate_tags=env.get("KANBAN_CONSOLIDATE_TAGS", "false").lower() in _TRUTHY,
        )
        log.debug(
            "Loaded board settings: done=%r ignored=%r columns=%s",
            settings.done_status_markers,
            settings.ignored_status_markers,
            sorted(settings.column_tags),
        )
        return settings
