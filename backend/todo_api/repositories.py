"""Repository encapsulating database operations on todos.

The repository returns SQLModel objects and performs commits/refreshes
where appropriate. It lets `SQLAlchemyError` propagate; callers decide
how a store failure is reported.
"""

from typing import List, Optional
from sqlmodel import Session, select
from . import models


class TodoRepository:
    """CRUD operations for `Todo` records."""
    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[models.Todo]:
        """Return every todo ordered by id."""
        stmt = select(models.Todo).order_by(models.Todo.id)
        return self.session.exec(stmt).all()

    def find_by_id(self, todo_id: int) -> Optional[models.Todo]:
        """Return a `Todo` by primary key or `None` if not found."""
        return self.session.get(models.Todo, todo_id)

    def create(self, todo: models.Todo) -> models.Todo:
        """Persist a new todo and return it with its generated id."""
        self.session.add(todo)
        self.session.commit()
        self.session.refresh(todo)
        return todo

    def update_by_id(self, todo_id: int, changes: dict) -> bool:
        """Apply `changes` to the todo with `todo_id`.

        Returns False when no such row exists. An empty `changes` dict is
        a no-op that still reports whether the row exists.
        """
        todo = self.session.get(models.Todo, todo_id)
        if todo is None:
            return False
        if changes:
            for field, value in changes.items():
                setattr(todo, field, value)
            self.session.add(todo)
            self.session.commit()
        return True

    def delete_by_id(self, todo_id: int) -> bool:
        """Delete the todo with `todo_id`; returns False if it did not exist."""
        todo = self.session.get(models.Todo, todo_id)
        if todo is None:
            return False
        self.session.delete(todo)
        self.session.commit()
        return True
