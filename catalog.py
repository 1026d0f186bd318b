#!/usr/bin/env python3
"""Book Catalog CLI - file or PostgreSQL storage."""
import argparse
import json
import logging
import sys

from tabulate import tabulate

from booklib.config import Config
from booklib.errors import LibraryError
from booklib.file_storage import FileBackend
from booklib.library import Library
from booklib.models import Book, BookPatch
from booklib.parse import book_to_dict

logger = logging.getLogger(__name__)


def display_books(books, format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["ID", "Title", "Pages", "Price", "Genres"]
        rows = [
            [
                book.id,
                book.title[:50] + "..." if len(book.title) > 50 else book.title,
                book.pages,
                f"{book.price:.2f}",
                book.genres_str[:30] + "..." if len(book.genres_str) > 30 else book.genres_str
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book_to_dict(book) for book in books], indent=2))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.price:.2f} ({book.genres_str})")


def init_catalog(args, config: Config):
    """Create an empty catalog file or the database table."""
    library = Library(config)
    try:
        backend = library.backend
        if isinstance(backend, FileBackend):
            if backend.initialize():
                print(f"Created catalog {backend.path}")
            else:
                print(f"Catalog {backend.path} already exists")
        else:
            backend.init_schema()
            print("Database schema ready")
    finally:
        library.close()


def list_books(args, config: Config):
    """Show every book."""
    with Library(config) as library:
        display_books(library.get_books(), args.format)


def show_book(args, config: Config):
    """Show one book."""
    with Library(config) as library:
        display_books([library.get_book(args.id)], args.format)


def add_book(args, config: Config):
    """Create a book from command line fields."""
    book = Book(title=args.title, pages=args.pages, price=args.price, genres=args.genre or [])
    with Library(config) as library:
        book_id = library.create_book(book)
    print(book_id)


def update_book(args, config: Config):
    """Apply a partial update."""
    patch = BookPatch(title=args.title, pages=args.pages, price=args.price, genres=args.genre)
    with Library(config) as library:
        book = library.change_book(args.id, patch)
        display_books([book], args.format)


def remove_book(args, config: Config):
    """Delete a book."""
    with Library(config) as library:
        library.remove_book(args.id)
    logger.info(f"Removed {args.id}")


def filter_books(args, config: Config):
    """List books matching a price filter."""
    with Library(config) as library:
        display_books(library.price_filter(args.expression), args.format)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Book Catalog - file or PostgreSQL storage CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create an empty catalog file
  %(prog)s --storage books.json init

  # Add a book
  %(prog)s add "Dune" --pages 412 --price 9.99 --genre scifi

  # Books cheaper than 10
  %(prog)s filter "<10" --format compact
        """
    )
    parser.add_argument("--storage", help="Catalog file path (default: $CATALOG_STORAGE_PATH or books.json)")
    parser.add_argument("--backend", choices=["file", "postgres"], help="Storage backend (default: $CATALOG_BACKEND or file)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("init", help="Create empty catalog storage")

    list_parser = subparsers.add_parser("list", help="List all books")
    get_parser = subparsers.add_parser("get", help="Show one book")
    get_parser.add_argument("id", help="Book ID")

    add_parser = subparsers.add_parser("add", help="Add a book")
    add_parser.add_argument("title", help="Book title")
    add_parser.add_argument("--pages", type=int, default=0, help="Page count")
    add_parser.add_argument("--price", type=float, default=0.0, help="Price")
    add_parser.add_argument("--genre", action="append", help="Genre tag (repeatable)")

    update_parser = subparsers.add_parser("update", help="Change fields of a book")
    update_parser.add_argument("id", help="Book ID")
    update_parser.add_argument("--title", help="New title")
    update_parser.add_argument("--pages", type=int, help="New page count")
    update_parser.add_argument("--price", type=float, help="New price")
    update_parser.add_argument("--genre", action="append", help="Replacement genre tag (repeatable)")

    remove_parser = subparsers.add_parser("remove", help="Remove a book")
    remove_parser.add_argument("id", help="Book ID")

    filter_parser = subparsers.add_parser("filter", help="Filter books by price, e.g. '>9.99'")
    filter_parser.add_argument("expression", help="Comparator (> or <) followed by a price")

    for sub in (list_parser, get_parser, update_parser, filter_parser):
        sub.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    return parser


COMMANDS = {
    "init": init_catalog,
    "list": list_books,
    "get": show_book,
    "add": add_book,
    "update": update_book,
    "remove": remove_book,
    "filter": filter_books,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = Config(storage_path=args.storage, backend=args.backend)
    except LibraryError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except LibraryError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
