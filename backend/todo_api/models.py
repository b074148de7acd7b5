"""SQLModel data models.

The service has a single table, `todos`. Python attributes are
snake_case; the `isChecked` column keeps the name clients see on the wire.
"""

from typing import Optional
from sqlalchemy import Boolean, Column
from sqlmodel import SQLModel, Field


class Todo(SQLModel, table=True):
    """A todo item.

    Fields:
    - `id`: surrogate key generated by the database on insert
    - `todo`: the item text, never null
    - `is_checked`: completion flag, stored in the `isChecked` column
    """
    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    todo: str = Field(max_length=255, nullable=False)
    is_checked: bool = Field(sa_column=Column("isChecked", Boolean, nullable=False))
