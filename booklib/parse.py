"""Parse filter expressions and stored book documents."""
import re
from typing import Any, Dict, List

from booklib.errors import FilterParseError
from booklib.models import Book, Books, PriceFilter

OPERATORS = (">", "<")

# Plain decimal literal: optional sign, optional fraction, optional exponent
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_price_filter(expression: str) -> PriceFilter:
    """
    Parse a price filter such as ``>9.99`` or ``<20``.

    Args:
        expression: Comparator followed immediately by a number

    Returns:
        PriceFilter for the expression

    Raises:
        FilterParseError: If the expression is too short, uses an
            unsupported operator or the threshold is not a number
    """
    if expression is None or len(expression) <= 1:
        raise FilterParseError(f"filter expression too short: {expression!r}")

    operator, number = expression[0], expression[1:]
    if operator not in OPERATORS:
        raise FilterParseError(f"unsupported operation {operator!r} in {expression!r}")

    if not _NUMBER_RE.fullmatch(number):
        raise FilterParseError(f"invalid price {number!r} in {expression!r}")

    return PriceFilter(operator=operator, threshold=float(number))


def parse_book(item: Dict[str, Any]) -> Book:
    """
    Parse a single stored book record.

    Args:
        item: Record with id, title, pages, price and genres keys

    Returns:
        Book object

    Raises:
        ValueError: If the record is not an object or has bad field types
    """
    if not isinstance(item, dict):
        raise ValueError(f"book record must be an object, got {type(item).__name__}")

    genres = item.get("genres") or []
    if not isinstance(genres, list):
        raise ValueError(f"genres must be a list, got {type(genres).__name__}")

    pages = item.get("pages") or 0
    if isinstance(pages, bool) or not isinstance(pages, (int, float)) or (isinstance(pages, float) and not pages.is_integer()):
        raise ValueError(f"pages must be a whole number, got {pages!r}")

    return Book(
        id=str(item.get("id", "")),
        title=str(item.get("title", "")),
        pages=int(pages),
        price=float(item.get("price") or 0.0),
        genres=[str(genre) for genre in genres],
    )


def parse_books_document(document: Any) -> Books:
    """
    Parse a whole catalog document.

    Args:
        document: Decoded JSON; a list of records or ``None``

    Returns:
        List of Book objects in document order
    """
    if document is None:
        return []
    if not isinstance(document, list):
        raise ValueError(f"catalog document must be a list, got {type(document).__name__}")
    return [parse_book(item) for item in document]


def book_to_dict(book: Book) -> Dict[str, Any]:
    """Serialize a book with stable field ordering."""
    return {
        "id": book.id,
        "title": book.title,
        "pages": book.pages,
        "price": book.price,
        "genres": list(book.genres),
    }


def books_to_document(books: Books) -> List[Dict[str, Any]]:
    """Serialize a collection for storage."""
    return [book_to_dict(book) for book in books]
