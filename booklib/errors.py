"""Error types raised by the catalog."""


class LibraryError(Exception):
    """Base class for every catalog error."""


class ValidationError(LibraryError):
    """A book is missing one of its required fields."""


class NotFoundError(LibraryError):
    """No book with the requested ID exists."""

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"can't find the book with ID {book_id!r}")


class FilterParseError(LibraryError):
    """A price filter expression could not be parsed."""


class StorageIOError(LibraryError):
    """The catalog file could not be resolved, read, decoded or written."""


class BackendError(LibraryError):
    """The relational backend reported a failure."""


class NotImplementedOperationError(LibraryError, NotImplementedError):
    """The active backend does not support the requested operation."""


class ConfigError(LibraryError):
    """Configuration values are invalid."""
