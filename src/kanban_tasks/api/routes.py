"""REST API routes for kanban-tasks."""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from kanban_tasks.api.task_handlers import (
    handle_markers_validate,
    handle_points_balance,
    handle_points_reset,
    handle_settings,
    handle_task_classify,
    handle_task_parse,
    handle_task_update,
)


# ---------------------------------------------------------------------------
# Request body models
# ---------------------------------------------------------------------------


class TaskLineBody(BaseModel):
    line: str
    file_path: Optional[str] = None
    line_number: int = 0


class TaskUpdateBody(TaskLineBody):
    done: Optional[bool] = None
    column: Optional[str] = None
    archive: bool = False
    on: Optional[str] = None


class MarkersBody(BaseModel):
    done: Optional[str] = None
    ignored: Optional[str] = None


def register_routes(app_router: APIRouter, settings, ledger) -> None:
    """Attach all REST routes to the router."""

    @app_router.post("/tasks/classify")
    def classify_task(body: TaskLineBody):
        return handle_task_classify(settings, line=body.line)

    @app_router.post("/tasks/parse")
    def parse_task_line(body: TaskLineBody):
        result = handle_task_parse(settings, **body.model_dump())
        if "error" in result:
            raise HTTPException(status_code=422, detail=result["error"])
        return result

    @app_router.post("/tasks/update")
    def update_task_line(body: TaskUpdateBody):
        result = handle_task_update(settings, ledger, **body.model_dump())
        if "error" in result:
            raise HTTPException(status_code=422, detail=result["error"])
        return result

    @app_router.post("/markers/validate")
    def validate_markers(body: MarkersBody):
        return handle_markers_validate(done=body.done, ignored=body.ignored)

    @app_router.get("/settings")
    def get_settings():
        return handle_settings(settings)

    @app_router.get("/points")
    def get_points():
        if ledger is None:
            raise HTTPException(status_code=404, detail="Points ledger is disabled")
        return handle_points_balance(ledger)

    @app_router.post("/points/reset")
    def reset_points():
        if ledger is None:
            raise HTTPException(status_code=404, detail="Points ledger is disabled")
        return handle_points_reset(ledger)
