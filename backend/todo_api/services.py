"""Business logic for the todo endpoints.

`TodoService` validates client input, performs exactly one repository
call per operation and returns an `Ok`/`Err` result. Validation always
happens before the store is touched, so invalid input never causes a
partial write.
"""

import logging
import re
from typing import Any, Optional

from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import models, repositories, schemas
from .results import Err, NotFoundError, Ok, Result, StoreError, ValidationError

logger = logging.getLogger("todo_api.services")

INVALID_INPUT = "Invalid input"
_UPDATE_FIELD_ERRORS = {
    "todo": "Invalid todo text",
    "isChecked": "Invalid isChecked value",
}
_ID_RE = re.compile(r"\s*(\d+)\s*", re.ASCII)
_MAX_ID = 2 ** 63 - 1


def parse_todo_id(raw: Any) -> Optional[int]:
    """Coerce a path parameter to a primary key.

    Returns None when `raw` cannot name any stored row (not a
    non-negative integer, or larger than a BIGINT).
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        match = _ID_RE.fullmatch(str(raw))
        if not match:
            return None
        value = int(match.group(1))
    if value < 0 or value > _MAX_ID:
        return None
    return value


def validate_create(body: Any) -> Result:
    """Check a create payload; returns `Ok(TodoIn)` or a 400 error."""
    if not isinstance(body, dict):
        return Err(ValidationError(INVALID_INPUT))
    try:
        return Ok(schemas.TodoIn.model_validate(body))
    except SchemaError:
        return Err(ValidationError(INVALID_INPUT))


def validate_update(body: Any) -> Result:
    """Check an update payload; returns `Ok(TodoPatch)` or a 400 error.

    A missing body means "change nothing". The first offending field
    decides the message.
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return Err(ValidationError(INVALID_INPUT))
    try:
        return Ok(schemas.TodoPatch.model_validate(body))
    except SchemaError as exc:
        field = exc.errors()[0]["loc"][0]
        return Err(ValidationError(_UPDATE_FIELD_ERRORS.get(field, INVALID_INPUT)))


class TodoService:
    """CRUD operations on todos returning `Ok`/`Err` results."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.TodoRepository(session)

    def _run(self, action: str, operation) -> Result:
        """Run one store operation, turning database failures into `StoreError`."""
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Error %s: %s", action, exc)
            return Err(StoreError(cause=exc))

    def list_todos(self) -> Result:
        """Return all todos wrapped in a `TodoList`."""
        def op():
            todos = self.repo.find_all()
            return Ok(schemas.TodoList(todos=[schemas.TodoOut.model_validate(t) for t in todos]))
        return self._run("fetching todos", op)

    def get_todo(self, raw_id: Any) -> Result:
        """Return one todo, or `NotFoundError`."""
        todo_id = parse_todo_id(raw_id)
        if todo_id is None:
            return Err(NotFoundError())

        def op():
            todo = self.repo.find_by_id(todo_id)
            if todo is None:
                return Err(NotFoundError())
            return Ok(schemas.TodoOut.model_validate(todo))
        return self._run("fetching todo", op)

    def create_todo(self, body: Any) -> Result:
        """Validate `body` and insert a new todo; the result carries the generated id."""
        checked = validate_create(body)
        if not checked.ok:
            return checked
        payload = checked.value

        def op():
            todo = self.repo.create(models.Todo(todo=payload.todo, is_checked=payload.is_checked))
            return Ok(schemas.TodoOut.model_validate(todo))
        return self._run("creating todo", op)

    def update_todo(self, raw_id: Any, body: Any) -> Result:
        """Apply the fields present in `body` to an existing todo.

        Body validation runs first, so a bad payload is reported as 400
        even when the id does not exist.
        """
        checked = validate_update(body)
        if not checked.ok:
            return checked
        changes = checked.value.changes()
        todo_id = parse_todo_id(raw_id)
        if todo_id is None:
            return Err(NotFoundError())

        def op():
            if self.repo.update_by_id(todo_id, changes):
                return Ok(None)
            return Err(NotFoundError())
        return self._run("updating todo", op)

    def delete_todo(self, raw_id: Any) -> Result:
        """Delete a todo; deleting an absent id is a `NotFoundError` every time."""
        todo_id = parse_todo_id(raw_id)
        if todo_id is None:
            return Err(NotFoundError())

        def op():
            if self.repo.delete_by_id(todo_id):
                return Ok(None)
            return Err(NotFoundError())
        return self._run("deleting todo", op)
