"""Process entry point: `python -m todo_api` or the `todo-api` script.

The store is checked before the server binds its port. A store that
cannot be reached at startup is fatal and the process exits with
status 1.
"""

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import init_db

logger = logging.getLogger("todo_api.server")


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    try:
        init_db()
    except SQLAlchemyError as exc:
        logger.error("DB Error: %s", exc)
        sys.exit(1)

    from .main import app

    logger.info("Server Running at http://localhost:%s/", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
