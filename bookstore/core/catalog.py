"""Catalog Helpers — pure functions over in-memory book collections.

Invariants:
    - No IO, no DB, no async
    - distinct_authors keeps first-seen order and returns each name once
"""

from typing import Iterable, Protocol

class HasAuthor(Protocol):
    author: str


def distinct_authors(books: Iterable[HasAuthor]) -> list[str]:
    """Unique author names across books, in the order first seen."""
    seen: dict[str, None] = {}
    for book in books:
        seen.setdefault(book.author, None)
    return list(seen)

