"""FastAPI application entrypoint and HTTP controllers.

Controllers are intentionally thin: they hand the raw path parameter and
JSON body to `TodoService` and translate the returned `Ok`/`Err` result
into a response with `to_response`.

Endpoints implemented:
- GET /todos/
- GET /todos/{todo_id}/
- POST /todos/
- PUT /todos/{todo_id}/
- DELETE /todos/{todo_id}/
- GET /health
"""

from contextlib import asynccontextmanager
from typing import Any
import json
import logging
import time
import uuid

from fastapi import FastAPI, Body, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import services
from .config import settings
from .database import create_db_and_tables, get_session
from .results import Result
from .schemas import ErrorOut, TodoList, TodoOut

logger = logging.getLogger("todo_api.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        create_db_and_tables()
    except SQLAlchemyError as exc:
        logger.error("DB Error: %s", exc)
        raise
    yield


app = FastAPI(title="Todo API", lifespan=lifespan)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _request_log_line(request: Request, req_id: str, started: float, status_code=None) -> str:
    fields = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client": request.client.host if request.client else "unknown",
    }
    if status_code is not None:
        fields["status_code"] = status_code
    return json.dumps(fields, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    logged = request.url.path.startswith("/todos")
    try:
        response = await call_next(request)
    except Exception:
        if logged:
            logger.exception("request_failed %s", _request_log_line(request, req_id, started))
        raise
    response.headers["X-Request-ID"] = req_id
    if logged:
        logger.info("request_done %s", _request_log_line(request, req_id, started, response.status_code))
    return response


def to_response(result: Result, status_code: int = 200) -> Response:
    """Map a service result to an HTTP response.

    Errors become `{"error": message}` with the error's status code,
    `Ok(None)` becomes an empty 204, anything else is serialized with
    wire field names.
    """
    if not result.ok:
        err = result.error
        return JSONResponse(status_code=err.status_code, content={"error": err.message})
    if result.value is None:
        return Response(status_code=204)
    return JSONResponse(status_code=status_code, content=result.value.model_dump(mode="json", by_alias=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies are client errors, reported like any other bad input."""
    return JSONResponse(status_code=400, content={"error": services.INVALID_INPUT})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def fallback_exception_handler(request: Request, exc: Exception):
    """Last resort for errors no controller converted: log the traceback, return its message."""
    logger.error("Server error: %s", exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


@app.get('/todos/', response_model=TodoList, responses={500: {"model": ErrorOut}})
def list_todos(db: Session = Depends(get_session)):
    """List every stored todo as `{"todos": [...]}` (possibly empty)."""
    return to_response(services.TodoService(db).list_todos())


@app.get('/todos/{todo_id}/', response_model=TodoOut, responses=ERROR_RESPONSES)
def get_todo(todo_id: str, db: Session = Depends(get_session)):
    """Return one todo by id, or 404 `Todo not found`."""
    return to_response(services.TodoService(db).get_todo(todo_id))


@app.post('/todos/', status_code=201, response_model=TodoOut, responses=ERROR_RESPONSES)
def create_todo(body: Any = Body(default=None), db: Session = Depends(get_session)):
    """Create a todo from `{"todo": str, "isChecked": bool}`.

    Both fields are required; a missing or empty `todo` or a non-boolean
    `isChecked` is rejected with 400 before anything is written.
    """
    return to_response(services.TodoService(db).create_todo(body), status_code=201)


@app.put('/todos/{todo_id}/', status_code=204, responses=ERROR_RESPONSES)
def update_todo(todo_id: str, body: Any = Body(default=None), db: Session = Depends(get_session)):
    """Update `todo` and/or `isChecked` of an existing todo.

    Fields left out of the body are not changed. A field that is sent
    must have the right type: a non-string `todo` gives 400
    `Invalid todo text`, a non-boolean `isChecked` gives 400
    `Invalid isChecked value`.
    """
    return to_response(services.TodoService(db).update_todo(todo_id, body))


@app.delete('/todos/{todo_id}/', status_code=204, responses=ERROR_RESPONSES)
def delete_todo(todo_id: str, db: Session = Depends(get_session)):
    """Delete a todo; 404 if it does not exist (including repeated deletes)."""
    return to_response(services.TodoService(db).delete_todo(todo_id))


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
