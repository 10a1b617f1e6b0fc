"""Book Data-Access Service — get/add/update/delete/search over the books table.

Invariants:
    - Constructed per request with an injected AsyncSession (no global handle)
    - Every operation is one transaction and returns Found | NotFound | Failed
    - update overwrites every field of the existing row; absent id -> NotFound
    - delete of an absent id -> NotFound, never a silent no-op
    - Store failures roll back and come back as Failed(DatabaseError)

Design Decisions:
    - search is a plain substring test (instr / strpos): case-sensitive,
      % and _ have no special meaning
    - Last writer wins on concurrent updates; no version column
"""

import functools
import logging
from typing import Awaitable, Callable, Iterable, TypeVar

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.catalog import distinct_authors
from bookstore.core.domain_types import BookId
from bookstore.core.errors import DatabaseError
from bookstore.core.results import Failed, Found, NotFound, StoreResult
from bookstore.db.functions import substring_position
from bookstore.models.book import BOOK_FIELDS, Book
from bookstore.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

R = TypeVar("R")


def store_operation(operation: str):
    """Turn SQLAlchemy failures inside a service method into Failed results."""

    def decorator(
        method: Callable[..., Awaitable[R]],
    ) -> Callable[..., Awaitable[R | Failed]]:
        @functools.wraps(method)
        async def wrapper(self: "BookStoreService", *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(
                    f"Book store {operation} failed: {e}",
                    extra={"error_code": "DATABASE_ERROR"},
                )
                return Failed(DatabaseError(type(e).__name__, operation))
        return wrapper

    return decorator


class BookStoreService:
    """Data-access operations for Book records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation("list")
    async def list_all(self) -> StoreResult[list[Book]]:
        result = await self.db.execute(select(Book))
        return Found(list(result.scalars().all()))

    @store_operation("get")
    async def get_by_id(self, book_id: BookId) -> StoreResult[Book]:
        book = await self.db.get(Book, book_id)
        if book is None:
            return NotFound(book_id)
        return Found(book)

    @store_operation("search")
    async def search(self, term: str) -> StoreResult[list[Book]]:
        """Books whose title or author contains term as a substring."""
        result = await self.db.execute(
            select(Book).where(
                or_(
                    substring_position(Book.title, term) > 0,
                    substring_position(Book.author, term) > 0,
                )
            )
        )
        return Found(list(result.scalars().all()))

    @store_operation("add")
    async def add(self, book: BookCreate) -> StoreResult[Book]:
        """Persist a new book; the store assigns its id."""
        row = Book(**book.model_dump(include=set(BOOK_FIELDS)))
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(f"Book '{row.title}' added", extra={"book_id": row.id})
        return Found(row)

    @store_operation("update")
    async def update(self, book: BookUpdate) -> StoreResult[Book]:
        """Overwrite every field of the book with book.id."""
        existing = await self.db.get(Book, book.id)
        if existing is None:
            return NotFound(book.id)
        for name in BOOK_FIELDS:
            setattr(existing, name, getattr(book, name))
        await self.db.commit()
        await self.db.refresh(existing)
        logger.info(f"Book {book.id} updated", extra={"book_id": book.id})
        return Found(existing)

    @store_operation("delete")
    async def delete(self, book_id: BookId) -> StoreResult[int]:
        existing = await self.db.get(Book, book_id)
        if existing is None:
            return NotFound(book_id)
        await self.db.delete(existing)
        await self.db.commit()
        logger.info(f"Book {book_id} deleted", extra={"book_id": book_id})
        return Found(book_id)

    def distinct_authors(self, books: Iterable[Book]) -> list[str]:
        return distinct_authors(books)
