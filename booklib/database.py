"""PostgreSQL storage for catalog books."""
import logging
from typing import Optional

import psycopg2
from psycopg2 import pool

from booklib.backend import Backend
from booklib.errors import BackendError, NotImplementedOperationError
from booklib.models import Book, Books, PriceFilter

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, pages, price, genres"


class PostgresBackend(Backend):
    """PostgreSQL backend with connection pooling."""

    name = "postgres"
    supports_price_filter = False

    def __init__(
        self,
        connection_string: str,
        min_conn: int = 1,
        max_conn: int = 10,
        connection_pool=None
    ):
        """
        Initialize database connection pool.

        Args:
            connection_string: PostgreSQL connection string
            min_conn: Minimum connections in pool
            max_conn: Maximum connections in pool
            connection_pool: Ready-made pool to use instead of creating one
        """
        if connection_pool is None:
            try:
                connection_pool = psycopg2.pool.SimpleConnectionPool(
                    min_conn,
                    max_conn,
                    connection_string
                )
            except psycopg2.Error as e:
                raise BackendError(f"Failed to create connection pool: {e}") from e
        self.connection_pool = connection_pool
        logger.info("Database connection pool created successfully")

    def init_schema(self):
        """Create the books table if it doesn't exist."""
        self._execute("""
            CREATE TABLE IF NOT EXISTS books (
                id VARCHAR(36) PRIMARY KEY,
                title TEXT NOT NULL,
                pages INTEGER NOT NULL,
                price DOUBLE PRECISION NOT NULL,
                genres TEXT[] NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        logger.info("Database schema initialized successfully")

    def find_all(self) -> Books:
        rows = self._query(f"SELECT {_COLUMNS} FROM books ORDER BY created_at")
        return [self._row_to_book(row) for row in rows]

    def find_by_id(self, book_id: str) -> Optional[Book]:
        rows = self._query(f"SELECT {_COLUMNS} FROM books WHERE id = %s", (book_id,))
        return self._row_to_book(rows[0]) if rows else None

    def create(self, book: Book) -> None:
        self._execute(
            f"INSERT INTO books ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
            (book.id, book.title, book.pages, book.price, list(book.genres))
        )

    def save(self, book: Book) -> None:
        self._execute(
            "UPDATE books SET title = %s, pages = %s, price = %s, genres = %s WHERE id = %s",
            (book.title, book.pages, book.price, list(book.genres), book.id)
        )

    def delete(self, book: Book) -> None:
        self._execute("DELETE FROM books WHERE id = %s", (book.id,))

    def filter_by_price(self, price_filter: PriceFilter) -> Books:
        raise NotImplementedOperationError("price filter is not implemented for the postgres backend")

    def close(self):
        """Close all connections in the pool."""
        if self.connection_pool:
            self.connection_pool.closeall()
            logger.info("Database connection pool closed")

    # --- Internal -------------------------------------------------------------------

    def _getconn(self):
        try:
            return self.connection_pool.getconn()
        except psycopg2.Error as e:
            raise BackendError(f"Failed to get a database connection: {e}") from e

    def _query(self, sql: str, params: tuple = ()) -> list:
        conn = self._getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall()
        except psycopg2.Error as e:
            self._rollback(conn)
            raise BackendError(f"Query failed: {e}") from e
        finally:
            self.connection_pool.putconn(conn)

    def _execute(self, sql: str, params: tuple = ()) -> None:
        conn = self._getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            raise BackendError(f"Statement failed: {e}") from e
        finally:
            self.connection_pool.putconn(conn)

    @staticmethod
    def _rollback(conn) -> None:
        # A dead connection cannot roll back
        if conn.closed:
            return
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed: {e}")

    @staticmethod
    def _row_to_book(row) -> Book:
        book_id, title, pages, price, genres = row
        return Book(
            id=book_id,
            title=title,
            pages=pages,
            price=price,
            genres=list(genres or [])
        )
