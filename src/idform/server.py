"""
HTTP surface for idform.

Exposes one identification form, its submission lifecycle and the user
table as JSON endpoints on a Starlette app:

    GET    /health
    GET    /api/form
    PUT    /api/form/fields        {"path": ..., "value": ...}
    POST   /api/form/submit
    POST   /api/form/dismiss
    POST   /api/form/reset
    GET    /api/states
    GET    /api/users              ?sort=id&direction=asc|desc
    POST   /api/users/{id}/edit
    PATCH  /api/users/{id}
    DELETE /api/users/{id}

Usage:
    python run_server.py --port 9110
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from idform.clients import HttpSubmissionSink, fetch_users
from idform.config import get_config
from idform.engine import FormEngine
from idform.errors import UnknownPathError, UnknownRecordError
from idform.schema import MEXICAN_STATES
from idform.submission import SubmissionLifecycle, SubmissionSink
from idform.table import TableStore, UserSource

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Malformed request body or parameters."""


async def _read_json(request: Request) -> dict[str, Any]:
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _form_view(engine: FormEngine) -> dict[str, Any]:
    return {
        "fields": [view.model_dump(mode="json") for view in engine.field_views()],
        "is_submittable": engine.is_submittable(),
        "submit_disabled": engine.submit_disabled,
        "submission": engine.lifecycle.state.model_dump(mode="json"),
    }


def _table_view(table: TableStore) -> dict[str, Any]:
    return {
        "loading": table.loading,
        "sort": {"key": table.sort_key, "direction": table.sort_direction},
        "edit_target": table.edit_target,
        "rows": [row.model_dump(mode="json") for row in table.rows],
    }


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "idform"})


async def get_form(request: Request) -> JSONResponse:
    return JSONResponse(_form_view(request.app.state.engine))


async def set_field(request: Request) -> JSONResponse:
    """Apply one edit and return the re-validated field."""
    engine: FormEngine = request.app.state.engine
    data = await _read_json(request)
    path = data.get("path")
    value = data.get("value")
    if not isinstance(path, str) or not isinstance(value, str):
        raise BadRequest("'path' and 'value' must be strings")

    engine.set_field(path, value)
    return JSONResponse({
        "field": engine.field_view(path).model_dump(mode="json"),
        "is_submittable": engine.is_submittable(),
        "submit_disabled": engine.submit_disabled,
    })


async def submit_form(request: Request) -> JSONResponse:
    engine: FormEngine = request.app.state.engine
    accepted = await engine.submit()
    body = {
        "accepted": accepted,
        "submission": engine.lifecycle.state.model_dump(mode="json"),
    }
    return JSONResponse(body, status_code=200 if accepted else 409)


async def dismiss_notification(request: Request) -> JSONResponse:
    engine: FormEngine = request.app.state.engine
    engine.lifecycle.dismiss()
    return JSONResponse(_form_view(engine))


async def reset_form(request: Request) -> JSONResponse:
    engine: FormEngine = request.app.state.engine
    engine.reset()
    return JSONResponse(_form_view(engine))


async def list_states(request: Request) -> JSONResponse:
    return JSONResponse([option.model_dump() for option in MEXICAN_STATES])


async def list_users(request: Request) -> JSONResponse:
    table: TableStore = request.app.state.table
    sort = request.query_params.get("sort")
    direction = request.query_params.get("direction", "asc")
    if sort:
        try:
            table.sort_by(sort, direction)
        except ValueError as e:
            raise BadRequest(str(e)) from e
    return JSONResponse(_table_view(table))


async def edit_user(request: Request) -> JSONResponse:
    table: TableStore = request.app.state.table
    row = table.begin_edit(request.path_params["user_id"])
    return JSONResponse({"row": row.model_dump(mode="json"), "edit_target": table.edit_target})


async def update_user(request: Request) -> JSONResponse:
    table: TableStore = request.app.state.table
    patch = await _read_json(request)
    user_id = request.path_params["user_id"]
    try:
        if table.edit_target == user_id:
            updated = table.save_edit(patch)
        else:
            updated = table.replace(user_id, patch)
    except ValidationError as e:
        raise BadRequest(f"Invalid user record: {e.error_count()} field error(s)") from e
    return JSONResponse(updated.model_dump(mode="json"))


async def delete_user(request: Request) -> JSONResponse:
    table: TableStore = request.app.state.table
    table.remove(request.path_params["user_id"])
    return JSONResponse(_table_view(table))


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=404)


async def _bad_request(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


def create_app(
    engine: FormEngine | None = None,
    table: TableStore | None = None,
    users_source: UserSource | None = None,
    sink: SubmissionSink | None = None,
) -> Starlette:
    """
    Create the Starlette app.

    Args:
        engine: Form engine to serve. If None, an identification form is
            created with a lifecycle posting to config.submit_url (or ``sink``).
        table: Table store to serve. If None, an empty one is created.
        users_source: Async callable loading the table in a background
            task started at startup.
            Defaults to ``fetch_users``.
        sink: Submission sink used when ``engine`` is None.
    """
    if engine is None:
        engine = FormEngine(lifecycle=SubmissionLifecycle(sink or HttpSubmissionSink()))
    elif engine.lifecycle is None:
        engine.lifecycle = SubmissionLifecycle(sink or HttpSubmissionSink())
    table = table if table is not None else TableStore()
    users_source = users_source or fetch_users

    @asynccontextmanager
    async def lifespan(app: Starlette):
        # Serve immediately; clients see loading=True until the fetch settles.
        app.state.users_task = asyncio.create_task(table.refresh(users_source))
        yield
        task = app.state.users_task
        if not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    app = Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route("/api/form", get_form, methods=["GET"]),
            Route("/api/form/fields", set_field, methods=["PUT"]),
            Route("/api/form/submit", submit_form, methods=["POST"]),
            Route("/api/form/dismiss", dismiss_notification, methods=["POST"]),
            Route("/api/form/reset", reset_form, methods=["POST"]),
            Route("/api/states", list_states, methods=["GET"]),
            Route("/api/users", list_users, methods=["GET"]),
            Route("/api/users/{user_id:int}/edit", edit_user, methods=["POST"]),
            Route("/api/users/{user_id:int}", update_user, methods=["PATCH"]),
            Route("/api/users/{user_id:int}", delete_user, methods=["DELETE"]),
        ],
        exception_handlers={
            UnknownPathError: _not_found,
            UnknownRecordError: _not_found,
            BadRequest: _bad_request,
        },
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.table = table
    return app


async def run_server(host: str | None = None, port: int | None = None) -> None:
    """
    Serve the app with uvicorn.

    Args:
        host: Host to bind to. If None, uses config.server_host.
        port: Port to listen on. If None, uses config.server_port.
    """
    import uvicorn

    config = get_config()
    host = host or config.server_host
    port = port or config.server_port

    logger.info(f"Starting idform server on {host}:{port}...")

    app = create_app()
    server_config = uvicorn.Config(app, host=host, port=port, log_level=config.log_level.lower())
    server_instance = uvicorn.Server(server_config)
    await server_instance.serve()
