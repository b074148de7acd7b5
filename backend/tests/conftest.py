from pathlib import Path
import os
import pytest

# Must be set before `todo_api` is imported: the engine is built at import time.
TEST_DB = Path(__file__).resolve().parents[1] / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ["ENV"] = "dev"

from sqlalchemy import func  # noqa: E402
from sqlmodel import SQLModel, Session, select  # noqa: E402
from todo_api.database import engine  # noqa: E402
from todo_api.models import Todo  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def reset_db():
    """Use a throwaway SQLite file for the whole run and remove it afterwards."""
    if TEST_DB.exists():
        TEST_DB.unlink()
    yield
    engine.dispose()
    if TEST_DB.exists():
        try:
            TEST_DB.unlink()
        except OSError:
            pass


@pytest.fixture(autouse=True)
def fresh_tables():
    """Recreate the todos table so every test starts empty and ids restart at 1."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def row_count():
    """Return a callable giving the current number of rows in `todos`."""
    def count():
        with Session(engine) as s:
            return s.exec(select(func.count()).select_from(Todo)).one()
    return count
