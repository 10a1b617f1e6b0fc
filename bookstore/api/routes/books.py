"""Books Routes — HTTP verbs mapped onto the book data-access service.

Invariants:
    - Payloads validated by Pydantic before the service is invoked (400, no store access)
    - NotFound results surface as 404 BOOK_NOT_FOUND; Failed as 503 DATABASE_ERROR
    - POST answers 201 with a Location header for GET /api/books/{id}
    - PUT and DELETE answer 204 with no body
    - PUT rejects a body id that differs from the path id (400)

Design Decisions:
    - /authors registered before /{book_id} so it is not parsed as an id
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import BookId
from bookstore.core.errors import BookIdMismatchError
from bookstore.infrastructure.database import get_db
from bookstore.models.book import Book
from bookstore.schemas.book import BookCreate, BookResponse, BookUpdate
from bookstore.services.book_store import BookStoreService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/books", tags=["books"])


def get_book_store(db: AsyncSession = Depends(get_db)) -> BookStoreService:
    """Per-request data-access service bound to the request's session."""
    return BookStoreService(db)


@router.get("", response_model=list[BookResponse])
async def list_books(
    search: str | None = Query(
        None, description="Substring to match against title or author",
    ),
    store: BookStoreService = Depends(get_book_store),
) -> list[Book]:
    """List all books, or those whose title or author contains `search`."""
    result = await (store.search(search) if search else store.list_all())
    return result.unwrap()


@router.get("/authors", response_model=list[str])
async def list_authors(
    store: BookStoreService = Depends(get_book_store),
) -> list[str]:
    """Distinct author names across the catalog."""
    books = (await store.list_all()).unwrap()
    return store.distinct_authors(books)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int, store: BookStoreService = Depends(get_book_store),
) -> Book:
    result = await store.get_by_id(BookId(book_id))
    return result.unwrap()


@router.post(
    "", response_model=BookResponse, status_code=status.HTTP_201_CREATED,
)
async def create_book(
    body: BookCreate,
    request: Request,
    response: Response,
    store: BookStoreService = Depends(get_book_store),
) -> Book:
    """Add a book; the store assigns its id."""
    book = (await store.add(body)).unwrap()
    response.headers["Location"] = request.app.url_path_for(
        "get_book", book_id=str(book.id),
    )
    return book


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_book(
    book_id: int,
    body: BookUpdate,
    store: BookStoreService = Depends(get_book_store),
) -> Response:
    """Replace every field of an existing book."""
    if body.id != book_id:
        raise BookIdMismatchError(book_id, body.id)
    (await store.update(body)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_book(
    book_id: int, store: BookStoreService = Depends(get_book_store),
) -> Response:
    (await store.delete(BookId(book_id))).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
