"""Store Results — Found / NotFound / Failed behave as explicit outcomes.

Tests cover:
    - Found.unwrap returns the value
    - NotFound.unwrap raises BookNotFoundError carrying the id (404)
    - Failed.unwrap re-raises the carried DatabaseError (503)
"""

import pytest

from bookstore.core.errors import BookNotFoundError, DatabaseError
from bookstore.core.results import Failed, Found, NotFound


def test_found_unwraps_value():
    result = Found([1, 2])
    assert result.ok is True
    assert result.unwrap() == [1, 2]


def test_not_found_is_not_ok():
    assert NotFound(7).ok is False


def test_not_found_unwrap_raises_book_not_found():
    with pytest.raises(BookNotFoundError) as exc_info:
        NotFound(7).unwrap()
    assert exc_info.value.book_id == 7
    assert exc_info.value.http_status == 404


def test_failed_unwrap_reraises_database_error():
    error = DatabaseError("OperationalError", "list")
    result = Failed(error)
    assert result.ok is False
    with pytest.raises(DatabaseError) as exc_info:
        result.unwrap()
    assert exc_info.value is error
    assert exc_info.value.http_status == 503


def test_results_are_frozen():
    result = NotFound(3)
    with pytest.raises(AttributeError):
        result.resource_id = 4
