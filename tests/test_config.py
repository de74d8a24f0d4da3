"""
Tests for config.py.

BoardSettings validates marker text eagerly and exposes the marker sets.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from pydantic import ValidationError

from kanban_tasks.config import BoardSettings, _parse_column_tags


class TestBoardSettings:
    def test_defaults(self):
        settings = BoardSettings()
        assert settings.done_status_markers == "xX"
        assert settings.ignored_status_markers == ""
        assert list(settings.done_markers) == ["x", "X"]
        assert len(settings.ignored_markers) == 0
        assert settings.column_tags == {}
        assert settings.consolidate_tags is False

    def test_custom_markers(self):
        settings = BoardSettings(done_status_markers="✓👍", ignored_status_markers="-~")
        assert "👍" in settings.done_markers
        assert "~" in settings.ignored_markers

    def test_invalid_done_markers_rejected(self):
        with pytest.raises(ValidationError, match="Invalid done status markers: Done status markers cannot be empty"):
            BoardSettings(done_status_markers="")

    def test_invalid_ignored_markers_rejected(self):
        with pytest.raises(ValueError, match="Invalid ignored status markers: Duplicate marker '-' at position 2"):
            BoardSettings(ignored_status_markers="--")

    def test_all_violations_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            BoardSettings(done_status_markers="x x\tx")
        message = str(exc_info.value)
        assert "Marker at position 2 is whitespace" in message
        assert "Marker at position 4 is a control character" in message
        assert "Duplicate marker 'x' at position 5" in message

    def test_frozen(self):
        settings = BoardSettings()
        with pytest.raises(ValidationError):
            settings.done_status_markers = "y"

    def test_column_name(self):
        settings = BoardSettings(column_tags={"doing": "In Progress"})
        assert settings.column_name("doing") == "In Progress"
        assert settings.column_name("unknown") is None
        assert settings.column_name(None) is None


class TestFromEnv:
    def test_defaults_from_empty_env(self):
        settings = BoardSettings.from_env({})
        assert settings == BoardSettings()

    def test_reads_variables(self):
        settings = BoardSettings.from_env(
            {
                "KANBAN_DONE_MARKERS": "x✓",
                "KANBAN_IGNORED_MARKERS": "-",
                "KANBAN_COLUMN_TAGS": "todo=To Do, doing=In Progress",
                "KANBAN_CONSOLIDATE_TAGS": "yes",
            }
        )
        assert settings.done_status_markers == "x✓"
        assert settings.ignored_status_markers == "-"
        assert settings.column_tags == {"todo": "To Do", "doing": "In Progress"}
        assert settings.consolidate_tags is True

    def test_invalid_markers_raise(self):
        with pytest.raises(ValueError):
            BoardSettings.from_env({"KANBAN_DONE_MARKERS": "x x"})


class TestParseColumnTags:
    def test_pairs(self):
        assert _parse_column_tags("a=Alpha,b=Beta") == {"a": "Alpha", "b": "Beta"}

    def test_bare_tag_maps_to_itself(self):
        assert _parse_column_tags("todo") == {"todo": "todo"}

    def test_hash_prefix_stripped(self):
        assert _parse_column_tags("#todo=To Do") == {"todo": "To Do"}

    def test_empty(self):
        assert _parse_column_tags("") == {}
        assert _parse_column_tags(" , ") == {}
