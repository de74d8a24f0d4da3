"""
kanban-tasks server entry point.

Startup sequence:
1. Read board settings (KANBAN_*) and POINTS_FILE from environment
2. Open the points ledger
3. Start REST API server in background thread (if API_ENABLED)
4. Register all MCP tools
5. Run MCP server (stdio transport)
"""

import logging
import os
import sys
import threading
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from kanban_tasks.api.tools import register_tools
from kanban_tasks.config import BoardSettings
from kanban_tasks.ledger.points_ledger import PointsLedger
from kanban_tasks.ledger.store import JsonFileStore, MemoryStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger(__name__)

DEFAULT_POINTS_FILE = Path.home() / ".cache" / "kanban-tasks" / "points.json"


def _start_api_server(settings, ledger, port: int) -> None:
    """Run the FastAPI/uvicorn server in a daemon thread."""
    import uvicorn

    from kanban_tasks.api.app import create_app

    app = create_app(settings, ledger)
    log.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


def open_points_store(environ=None):
    """
    Pick the points store from POINTS_FILE.

    Unset means DEFAULT_POINTS_FILE; an empty value keeps the balance in memory.
    """
    env = os.environ if environ is None else environ
    points_file = env.get("POINTS_FILE", str(DEFAULT_POINTS_FILE))
    if not points_file:
        log.info("Points file disabled, balance kept in memory")
        return MemoryStore()
    log.info("Points file: %s", points_file)
    return JsonFileStore(Path(points_file))


def main() -> None:
    try:
        settings = BoardSettings.from_env()
    except ValueError as e:
        log.error("Invalid board configuration: %s", e)
        sys.exit(1)

    log.info("Done markers: %r", settings.done_status_markers)
    log.info("Ignored markers: %r", settings.ignored_status_markers)
    log.info("Column tags: %s", settings.column_tags)

    ledger = PointsLedger(open_points_store())

    # Start REST API in a daemon thread
    api_enabled = os.environ.get("API_ENABLED", "true").lower() in ("true", "1", "yes")
    if api_enabled:
        api_port = int(os.environ.get("API_PORT", "9410"))
        api_thread = threading.Thread(
            target=_start_api_server, args=(settings, ledger, api_port), daemon=True
        )
        api_thread.start()

    # Create MCP server and register tools
    mcp = FastMCP("kanban-tasks")
    register_tools(mcp, settings, ledger)

    log.info("Starting kanban-tasks server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
