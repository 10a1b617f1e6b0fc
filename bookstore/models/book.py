"""Book ORM — the single persisted entity of the bookstore.

Invariants:
    - id is an integer primary key assigned by the store on insert
    - Every column is non-nullable; string lengths mirror the schema limits
    - No relationships to other tables
"""

from sqlalchemy import String, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.core.domain_types import (
    TITLE_MAX_LENGTH, AUTHOR_MAX_LENGTH, LANGUAGE_MAX_LENGTH,
    CATEGORY_MAX_LENGTH, IMAGE_URL_MAX_LENGTH,
)
from bookstore.db.base import Base

# Columns copied wholesale on full-record update
BOOK_FIELDS = (
    "title", "author", "no_of_pages", "language",
    "category", "price", "image_url",
)


class Book(Base):
    """Catalog item with bibliographic and pricing attributes."""
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH), nullable=False,
    )
    author: Mapped[str] = mapped_column(
        String(AUTHOR_MAX_LENGTH), nullable=False,
    )
    no_of_pages: Mapped[int] = mapped_column(Integer, nullable=False)
    language: Mapped[str] = mapped_column(
        String(LANGUAGE_MAX_LENGTH), nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(CATEGORY_MAX_LENGTH), nullable=False,
    )
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image_url: Mapped[str] = mapped_column(
        String(IMAGE_URL_MAX_LENGTH), nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r}>"
