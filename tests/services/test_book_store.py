"""Book Data-Access Service — store operations against an in-memory database.

Invariants:
    - add assigns an id; get_by_id round-trips every field
    - update / delete of an absent id return NotFound, never a silent no-op
    - delete removes the row so a later get returns NotFound
    - search matches title OR author substrings and nothing else
    - store failures come back as Failed(DatabaseError), session rolled back
"""

import pytest
from sqlalchemy.exc import OperationalError

from bookstore.core.errors import DatabaseError
from bookstore.core.results import Failed, Found, NotFound
from bookstore.models.book import Book
from bookstore.schemas.book import BookCreate, BookUpdate
from bookstore.services.book_store import BookStoreService


@pytest.fixture
def store(test_db):
    return BookStoreService(test_db)


@pytest.fixture
def new_book(make_payload):
    def _new(**overrides) -> BookCreate:
        return BookCreate.model_validate(make_payload(**overrides))
    return _new


async def test_add_assigns_id(store, new_book):
    result = await store.add(new_book())
    assert isinstance(result, Found)
    assert result.value.id is not None


async def test_add_then_get_round_trips_all_fields(store, new_book):
    created = (await store.add(new_book())).unwrap()
    fetched = (await store.get_by_id(created.id)).unwrap()
    assert (
        fetched.title, fetched.author, fetched.no_of_pages, fetched.language,
        fetched.category, fetched.price, fetched.image_url,
    ) == ("Dune", "Herbert", 412, "English", "SciFi", 9.99, "http://x/dune.jpg")


async def test_ids_are_unique(store, new_book):
    first = (await store.add(new_book())).unwrap()
    second = (await store.add(new_book(title="Dune Messiah"))).unwrap()
    assert first.id != second.id


async def test_get_missing_returns_not_found(store):
    result = await store.get_by_id(12345)
    assert result == NotFound(12345)


async def test_list_all_returns_every_book(store, new_book):
    await store.add(new_book())
    await store.add(new_book(title="Children of Dune"))
    books = (await store.list_all()).unwrap()
    assert sorted(b.title for b in books) == ["Children of Dune", "Dune"]


async def test_list_all_empty(store):
    assert (await store.list_all()).unwrap() == []


async def test_update_overwrites_every_field(store, new_book):
    created = (await store.add(new_book())).unwrap()
    update = BookUpdate(
        id=created.id, title="Dune (Deluxe)", author="Frank Herbert",
        no_of_pages=600, language="German", category="Classics",
        price=12.50, image_url="https://x/dune2.jpg",
    )
    updated = (await store.update(update)).unwrap()
    assert updated.id == created.id
    assert updated.title == "Dune (Deluxe)"
    assert updated.author == "Frank Herbert"
    assert updated.no_of_pages == 600
    assert updated.language == "German"
    assert updated.category == "Classics"
    assert updated.price == 12.50
    assert updated.image_url == "https://x/dune2.jpg"


async def test_update_missing_returns_not_found(store, make_payload):
    update = BookUpdate.model_validate({**make_payload(), "id": 999})
    result = await store.update(update)
    assert isinstance(result, NotFound)
    assert result.resource_id == 999
    assert (await store.list_all()).unwrap() == []


async def test_delete_removes_book(store, new_book):
    created = (await store.add(new_book())).unwrap()
    assert (await store.delete(created.id)) == Found(created.id)
    assert isinstance(await store.get_by_id(created.id), NotFound)


async def test_delete_missing_returns_not_found(store):
    assert await store.delete(404) == NotFound(404)


async def test_search_matches_title_or_author(store, new_book):
    await store.add(new_book(title="The Hobbit", author="J.R.R. Tolkien"))
    await store.add(new_book(title="Tolkien: A Biography", author="Humphrey Carpenter"))
    await store.add(new_book(title="Dune", author="Herbert"))
    books = (await store.search("Tolkien")).unwrap()
    assert sorted(b.title for b in books) == ["The Hobbit", "Tolkien: A Biography"]


async def test_search_is_case_sensitive(store, new_book):
    await store.add(new_book(title="The Hobbit", author="J.R.R. Tolkien"))
    await store.add(new_book(title="Silmarillion", author="J.R.R. TOLKIEN"))
    books = (await store.search("Tolkien")).unwrap()
    assert [b.title for b in books] == ["The Hobbit"]


async def test_search_no_match(store, new_book):
    await store.add(new_book())
    assert (await store.search("Tolkien")).unwrap() == []


async def test_search_treats_wildcards_literally(store, new_book):
    await store.add(new_book(title="100% Dune"))
    await store.add(new_book(title="Dune"))
    books = (await store.search("100%")).unwrap()
    assert [b.title for b in books] == ["100% Dune"]
    assert (await store.search("_")).unwrap() == []


async def test_distinct_authors_over_store_rows(store, new_book):
    await store.add(new_book(author="Herbert"))
    await store.add(new_book(title="Dune Messiah", author="Herbert"))
    await store.add(new_book(title="Emma", author="Austen"))
    books = (await store.list_all()).unwrap()
    assert sorted(store.distinct_authors(books)) == ["Austen", "Herbert"]


async def test_store_failure_returns_failed(store, test_db, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(test_db, "execute", broken_execute)
    result = await store.list_all()
    assert isinstance(result, Failed)
    assert isinstance(result.error, DatabaseError)
    assert result.error.operation == "list"


async def test_rows_are_book_models(store, new_book):
    created = (await store.add(new_book())).unwrap()
    assert isinstance(created, Book)
