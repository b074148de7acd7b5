"""Pydantic request/response schemas used by the API.

Request schemas use strict types: JSON `"true"` is not a boolean and
`1` is not a string. Response schemas serialize `is_checked` under its
wire name `isChecked`.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from typing import List


class TodoIn(BaseModel):
    """Payload for creating a todo; both fields are required."""
    todo: StrictStr = Field(min_length=1, max_length=255)
    is_checked: StrictBool = Field(alias="isChecked")


class TodoPatch(BaseModel):
    """Payload for updating a todo.

    Both fields are optional, but when a field is sent it must have the
    right type; `null` is rejected. Field order matters: `todo` errors are
    reported before `isChecked` errors.
    """
    todo: StrictStr = Field(default=None, max_length=255)
    is_checked: StrictBool = Field(default=None, alias="isChecked")

    def changes(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TodoOut(BaseModel):
    """A stored todo as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    todo: str
    is_checked: bool = Field(serialization_alias="isChecked")


class TodoList(BaseModel):
    """Response for the list endpoint."""
    todos: List[TodoOut]


class ErrorOut(BaseModel):
    """Error body shared by all 4xx/5xx responses."""
    error: str
