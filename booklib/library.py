"""Catalog facade over the configured storage backend."""
import logging
import uuid
from typing import Optional, Union

from booklib.backend import Backend
from booklib.config import Config
from booklib.database import PostgresBackend
from booklib.errors import NotFoundError, NotImplementedOperationError, ValidationError
from booklib.file_storage import FileBackend
from booklib.models import MUTABLE_FIELDS, Book, BookPatch, Books
from booklib.parse import parse_price_filter

logger = logging.getLogger(__name__)


def open_backend(config: Config) -> Backend:
    """
    Build the backend selected by ``config``.

    Args:
        config: Configuration with storage path and backend selector

    Returns:
        FileBackend or PostgresBackend
    """
    if config.use_sql:
        return PostgresBackend(config.DATABASE_URL)
    return FileBackend(config.STORAGE_PATH, atomic_writes=config.ATOMIC_WRITES)


class Library:
    """
    Public entry point for catalog operations.

    The backend is chosen once at construction; every operation delegates
    to it and blocks until the underlying I/O completes.
    """

    def __init__(self, config: Optional[Config] = None, backend: Optional[Backend] = None):
        """
        Initialize the library.

        Args:
            config: Configuration used to open a backend (defaults to ``Config()``)
            backend: Already opened backend; takes precedence over ``config``
        """
        if backend is None:
            backend = open_backend(config or Config())
        self.backend = backend
        logger.debug(f"Library using {backend.name} backend")

    def get_books(self) -> Books:
        """Return every book in the catalog."""
        return self.backend.find_all()

    def create_book(self, book: Book) -> str:
        """
        Validate and store a new book.

        Args:
            book: Candidate book; its ``id`` is overwritten

        Returns:
            Newly assigned book ID

        Raises:
            ValidationError: If genres, pages, price or title is missing
        """
        missing = book.missing_fields()
        if missing:
            raise ValidationError(f"not all fields are populated: {', '.join(missing)}")

        book.id = str(uuid.uuid4())
        self.backend.create(book)
        logger.info(f"Created book {book.id}: {book.title}")
        return book.id

    def get_book(self, book_id: str) -> Book:
        """
        Fetch a book by ID.

        Raises:
            NotFoundError: If no book has this ID
        """
        book = self.backend.find_by_id(book_id)
        if book is None:
            raise NotFoundError(book_id)
        return book

    def remove_book(self, book_id: str) -> None:
        """Delete exactly one book by ID."""
        book = self.get_book(book_id)
        self.backend.delete(book)
        logger.info(f"Removed book {book_id}")

    def change_book(self, book_id: str, patch: Union[BookPatch, Book]) -> Book:
        """
        Merge a partial update into an existing book.

        Fields that are ``None``, zero or empty in ``patch`` are left
        untouched. The ID is never changed.

        Args:
            book_id: ID of the book to update
            patch: BookPatch, or a Book whose ``id`` is ignored

        Returns:
            The merged book as persisted

        Raises:
            ValidationError: If the patch sets a negative page count or price
            NotFoundError: If no book has this ID
        """
        negative = [name for name in ("pages", "price") if (getattr(patch, name, None) or 0) < 0]
        if negative:
            raise ValidationError(f"fields must be positive: {', '.join(negative)}")

        book = self.get_book(book_id)
        changed = []
        for name in MUTABLE_FIELDS:
            value = getattr(patch, name, None)
            if value:
                setattr(book, name, list(value) if name == "genres" else value)
                changed.append(name)

        self.backend.save(book)
        logger.info(f"Updated book {book_id}: {', '.join(changed) or 'no changes'}")
        return book

    def price_filter(self, expression: str) -> Books:
        """
        Return books whose price satisfies ``expression`` (``>10``, ``<5.5``).

        The backend is checked before the expression is parsed, so a
        backend without price filtering fails without looking at it.

        Raises:
            NotImplementedOperationError: If the backend can't filter
            FilterParseError: If the expression is malformed
        """
        if not self.backend.supports_price_filter:
            raise NotImplementedOperationError(f"price filter is not implemented for the {self.backend.name} backend")
        return self.backend.filter_by_price(parse_price_filter(expression))

    def close(self):
        """Release the backend."""
        self.backend.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
