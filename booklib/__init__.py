"""Book catalog storage with file and PostgreSQL backends."""
from booklib.errors import (
    BackendError,
    ConfigError,
    FilterParseError,
    LibraryError,
    NotFoundError,
    NotImplementedOperationError,
    StorageIOError,
    ValidationError,
)
from booklib.library import Library
from booklib.models import Book, BookPatch, Books, PriceFilter

__all__ = [
    "BackendError",
    "Book",
    "BookPatch",
    "Books",
    "ConfigError",
    "FilterParseError",
    "Library",
    "LibraryError",
    "NotFoundError",
    "NotImplementedOperationError",
    "PriceFilter",
    "StorageIOError",
    "ValidationError",
]
