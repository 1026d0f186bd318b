"""Abstract base class for catalog storage backends."""
from abc import ABC, abstractmethod
from typing import Optional

from booklib.models import Book, Books, PriceFilter


class Backend(ABC):
    """
    Capability set every storage backend provides.

    The library facade holds exactly one backend, so swapping the file
    snapshot for PostgreSQL does not change calling code. Records are
    matched by ID using equality.
    """

    name = "abstract"
    supports_price_filter = True

    @abstractmethod
    def find_all(self) -> Books:
        """Return every stored book."""

    @abstractmethod
    def find_by_id(self, book_id: str) -> Optional[Book]:
        """Return the book with ``book_id`` or ``None`` if absent."""

    @abstractmethod
    def create(self, book: Book) -> None:
        """Store a new book. ``book.id`` is already assigned."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Overwrite the stored book with the same ID."""

    @abstractmethod
    def delete(self, book: Book) -> None:
        """Remove the stored book with the same ID."""

    @abstractmethod
    def filter_by_price(self, price_filter: PriceFilter) -> Books:
        """Return stored books matching ``price_filter`` in storage order."""

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
