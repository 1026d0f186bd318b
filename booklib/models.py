"""Data models for catalog books."""
from dataclasses import dataclass, field
from typing import List, Optional

# Fields a partial update may overwrite, in merge order
MUTABLE_FIELDS = ("price", "title", "pages", "genres")


@dataclass
class Book:
    """A single catalog record."""
    title: str = ""
    pages: int = 0
    price: float = 0.0
    genres: List[str] = field(default_factory=list)
    id: str = ""

    @property
    def genres_str(self) -> str:
        """Format genres as comma-separated string."""
        return ", ".join(self.genres) if self.genres else "None"

    def missing_fields(self) -> List[str]:
        """
        List the required fields that are absent, zero or empty.

        Returns:
            Field names in the order they are checked
        """
        missing = []
        if not self.genres:
            missing.append("genres")
        if not self.pages or self.pages < 0:
            missing.append("pages")
        if not self.price or self.price < 0:
            missing.append("price")
        if not self.title:
            missing.append("title")
        return missing


Books = List[Book]


@dataclass
class BookPatch:
    """Partial update for a book. ``None`` leaves a field untouched."""
    title: Optional[str] = None
    pages: Optional[int] = None
    price: Optional[float] = None
    genres: Optional[List[str]] = None


@dataclass(frozen=True)
class PriceFilter:
    """Strict price comparison, e.g. ``>9.99``."""
    operator: str
    threshold: float

    def matches(self, book: Book) -> bool:
        if self.operator == ">":
            return book.price > self.threshold
        return book.price < self.threshold

    def apply(self, books: Books) -> Books:
        """Return matching books, keeping collection order."""
        return [book for book in books if self.matches(book)]

    def __str__(self) -> str:
        return f"{self.operator}{self.threshold:g}"
