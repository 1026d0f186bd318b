"""JSON snapshot storage for the whole catalog."""
import json
import logging
import os
import stat
import tempfile
from typing import Optional

from booklib.backend import Backend
from booklib.errors import NotFoundError, StorageIOError
from booklib.models import Book, Books, PriceFilter
from booklib.parse import books_to_document, parse_books_document

logger = logging.getLogger(__name__)


class FileBackend(Backend):
    """
    Catalog stored as one pretty-printed JSON document.

    Every mutation loads the full collection, changes it in memory and
    rewrites the whole file. There is no locking: two concurrent writers
    against the same path race and the last save wins.
    """

    name = "file"

    def __init__(self, path: str, atomic_writes: bool = True):
        """
        Initialize file backend.

        Args:
            path: Catalog file location (resolved to an absolute path)
            atomic_writes: Write to a temporary file and rename it into place
        """
        if not path:
            raise StorageIOError("storage path is empty")
        self.path = os.path.abspath(path)
        if os.path.isdir(self.path):
            raise StorageIOError(f"Path points to a directory, expected file: {self.path}")
        self.atomic_writes = atomic_writes

    def initialize(self) -> bool:
        """
        Create an empty catalog if the file does not exist yet.

        Returns:
            True if a new file was written
        """
        if os.path.exists(self.path):
            return False
        self.write([])
        logger.info(f"Created empty catalog at {self.path}")
        return True

    def load(self) -> Books:
        """Read the whole collection from disk."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise StorageIOError(f"Failed to read catalog {self.path}: {e}") from e
        except ValueError as e:
            raise StorageIOError(f"Catalog {self.path} is not valid JSON: {e}") from e

        try:
            return parse_books_document(document)
        except (TypeError, ValueError) as e:
            raise StorageIOError(f"Catalog {self.path} has malformed records: {e}") from e

    def write(self, books: Books) -> None:
        """
        Overwrite the catalog file with ``books``.

        Args:
            books: Full collection, written in order
        """
        data = json.dumps(books_to_document(books), indent=4)
        try:
            if self.atomic_writes:
                self._replace(data)
            else:
                with open(self.path, "w", encoding="utf-8") as f:
                    f.write(data)
        except OSError as e:
            raise StorageIOError(f"Failed to write catalog {self.path}: {e}") from e
        logger.debug(f"Saved {len(books)} books to {self.path}")

    def _replace(self, data: str) -> None:
        fd, temp_path = tempfile.mkstemp(
            dir=os.path.dirname(self.path),
            prefix=os.path.basename(self.path) + ".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.chmod(temp_path, self._file_mode())
            os.replace(temp_path, self.path)
        except OSError:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def _file_mode(self) -> int:
        """Mode for the rewritten file: keep the current one, else 0644 minus umask."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o644 & ~umask

    @staticmethod
    def wanted_index(book_id: str, books: Books) -> int:
        """
        Find the position of a book by ID.

        Args:
            book_id: ID to look for
            books: Loaded collection

        Returns:
            Index of the first matching book

        Raises:
            NotFoundError: If no book has this ID
        """
        for index, book in enumerate(books):
            if book.id == book_id:
                return index
        raise NotFoundError(book_id)

    # Backend capability set

    def find_all(self) -> Books:
        return self.load()

    def find_by_id(self, book_id: str) -> Optional[Book]:
        books = self.load()
        try:
            return books[self.wanted_index(book_id, books)]
        except NotFoundError:
            return None

    def create(self, book: Book) -> None:
        books = self.load()
        books.append(book)
        self.write(books)

    def save(self, book: Book) -> None:
        books = self.load()
        books[self.wanted_index(book.id, books)] = book
        self.write(books)

    def delete(self, book: Book) -> None:
        books = self.load()
        del books[self.wanted_index(book.id, books)]
        self.write(books)

    def filter_by_price(self, price_filter: PriceFilter) -> Books:
        return price_filter.apply(self.load())
