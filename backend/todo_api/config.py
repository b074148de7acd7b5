"""Application settings and validation."""

import os

from dotenv import load_dotenv

# Values already present in the environment take precedence over `.env`.
load_dotenv(override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


class Settings:
    ENV: str
    DB_HOST: str
    DB_PORT: int
    DB_DATABASE: str
    DB_USER: str
    DB_PASSWORD: str
    DATABASE_URL: str
    HOST: str
    PORT: int
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DB_HOST = os.getenv("DB_HOST", "localhost")
        self.DB_PORT = _int_env("DB_PORT", 3306)
        self.DB_DATABASE = os.getenv("DB_DATABASE", "todos" if self.ENV == "dev" else "")
        self.DB_USER = os.getenv("DB_USER", "root")
        self.DB_PASSWORD = os.getenv("DB_PASSWORD", "")
        # full SQLAlchemy URL, wins over the DB_* values when set
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = _int_env("PORT", 3000)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    def _validate(self):
        for name in ("DB_PORT", "PORT"):
            value = getattr(self, name)
            if not 0 < value < 65536:
                raise RuntimeError(f"{name} must be between 1 and 65535, got {value}")
        if self.ENV != "dev" and not self.DATABASE_URL and not self.DB_DATABASE:
            raise RuntimeError("DB_DATABASE or DATABASE_URL must be set in non-dev environments")


settings = Settings()
