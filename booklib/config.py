"""Configuration management."""
import os
from typing import Optional

from dotenv import load_dotenv

from booklib.errors import ConfigError

# Load environment variables
load_dotenv()

BACKENDS = ("file", "postgres")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Application configuration.

    Explicit keyword arguments win over environment variables, which win
    over defaults. Values are read when the object is built, so separate
    instances can point at separate catalogs.
    """

    def __init__(
        self,
        storage_path: Optional[str] = None,
        backend: Optional[str] = None,
        atomic_writes: Optional[bool] = None
    ):
        # Storage
        self.STORAGE_PATH = storage_path or os.getenv("CATALOG_STORAGE_PATH", "books.json")
        self.BACKEND = (backend or os.getenv("CATALOG_BACKEND", "file")).strip().lower()
        if self.BACKEND not in BACKENDS:
            raise ConfigError(f"Unknown backend {self.BACKEND!r}, expected one of {', '.join(BACKENDS)}")
        if atomic_writes is None:
            atomic_writes = _env_flag("CATALOG_ATOMIC_WRITES", "1")
        self.ATOMIC_WRITES = atomic_writes

        # Database
        self.DB_HOST = os.getenv("DB_HOST", "localhost")
        self.DB_PORT = os.getenv("DB_PORT", "5432")
        self.DB_NAME = os.getenv("DB_NAME", "booksdb")
        self.DB_USER = os.getenv("DB_USER", "postgres")
        self.DB_PASSWORD = os.getenv("DB_PASSWORD", "")

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def DATABASE_URL(self):
        """Build PostgreSQL connection string."""
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def use_sql(self) -> bool:
        return self.BACKEND == "postgres"
