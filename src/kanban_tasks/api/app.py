"""FastAPI application factory for the kanban-tasks REST API."""

from fastapi import APIRouter, FastAPI

from kanban_tasks.api.routes import register_routes


def create_app(settings, ledger=None) -> FastAPI:
    """Build and return a FastAPI app wired to the given settings and ledger."""
    app = FastAPI(title="kanban-tasks", docs_url="/api/docs", openapi_url="/api/openapi.json")

    api = APIRouter(prefix="/api")
    register_routes(api, settings, ledger)
    app.include_router(api)

    return app
