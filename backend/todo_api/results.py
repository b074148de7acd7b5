"""Operation results and the service error taxonomy.

Service methods never raise for expected failures. They return either
`Ok(value)` or `Err(error)`, and the HTTP layer maps the error type to a
status code in one place.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")

TODO_NOT_FOUND = "Todo not found"


class TodoError(Exception):
    """Base class for errors returned from service operations."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoError):
    """Client input failed presence or type checks. Never reaches the store."""
    status_code = 400


class NotFoundError(TodoError):
    """The targeted todo id does not exist."""
    status_code = 404

    def __init__(self, message: str = TODO_NOT_FOUND):
        super().__init__(message)


class StoreError(TodoError):
    """The database failed; `cause` is kept for server-side logging only."""
    status_code = 500

    def __init__(self, message: str = "Database error", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: TodoError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[Any], Err]
