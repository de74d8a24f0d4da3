"""MCP tool registration for kanban-tasks."""

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from kanban_tasks.api.task_handlers import (
    handle_markers_validate,
    handle_points_balance,
    handle_points_reset,
    handle_task_classify,
    handle_task_parse,
    handle_task_update,
)

log = logging.getLogger(__name__)

_NO_LEDGER = {"error": "Points ledger is disabled"}


def register_tools(mcp: FastMCP, settings, ledger) -> None:
    """Register all MCP tools onto the FastMCP instance."""

    # ------------------------------------------------------------------
    # Task line tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def task_classify(line: str) -> str:
        """
        Check whether a markdown line is a task the board tracks.

        Args:
            line: A single markdown line, e.g. "- [ ] Buy milk #shopping"

        Returns:
            JSON object with "tracked": true/false
        """
        return json.dumps(handle_task_classify(settings, line=line), indent=2)

    @mcp.tool()
    def task_parse(line: str, file_path: Optional[str] = None, line_number: int = 0) -> str:
        """
        Parse a task line into its fields.

        Args:
            line: A tracked task line
            file_path: Source file, reported back in "ref"
            line_number: Zero-based line offset in the source file

        Returns:
            JSON task object (content, done, done_date, tags, column, points,
            block_link, ...) or error message
        """
        return json.dumps(
            handle_task_parse(settings, line=line, file_path=file_path, line_number=line_number),
            indent=2,
        )

    @mcp.tool()
    def task_update(
        line: str,
        done: Optional[bool] = None,
        column: Optional[str] = None,
        archive: bool = False,
        on: Optional[str] = None,
    ) -> str:
        """
        Change a task line and return the rewritten markdown.

        Only the fields you pass are changed. Completing a task stamps a
        ✅ date and adds its $points to the balance; reopening removes both.

        Args:
            line: The current task line
            done: New completion status
            column: New column tag ("" to clear)
            archive: Mark done and move to the "archived" column
            on: Completion date to stamp instead of today (YYYY-MM-DD)

        Returns:
            JSON with the updated task and its new "line", or error message
        """
        try:
            return json.dumps(
                handle_task_update(
                    settings,
                    ledger,
                    line=line,
                    done=done,
                    column=column,
                    archive=archive,
                    on=on,
                ),
                indent=2,
            )
        except Exception as e:
            log.exception("task_update failed for %r", line)
            return json.dumps({"error": str(e)})

    # ------------------------------------------------------------------
    # Configuration tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def markers_validate(done: Optional[str] = None, ignored: Optional[str] = None) -> str:
        """
        Validate status marker strings without applying them.

        Args:
            done: Candidate done markers, e.g. "xX✓"
            ignored: Candidate ignored markers, e.g. "-~"

        Returns:
            JSON with the violation list for each string and "valid"
        """
        return json.dumps(handle_markers_validate(done=done, ignored=ignored), indent=2)

    # ------------------------------------------------------------------
    # Points tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def points_balance() -> str:
        """
        Show the current points balance.

        Returns:
            JSON with "balance"
        """
        if ledger is None:
            return json.dumps(_NO_LEDGER)
        return json.dumps(handle_points_balance(ledger), indent=2)

    @mcp.tool()
    def points_reset() -> str:
        """
        Reset the points balance to zero.

        Returns:
            JSON with the new "balance"
        """
        if ledger is None:
            return json.dumps(_NO_LEDGER)
        return json.dumps(handle_points_reset(ledger), indent=2)
