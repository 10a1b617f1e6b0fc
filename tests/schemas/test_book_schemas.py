"""Book schema validation — field limits, URL check and camelCase wire format.

Invariants:
    - title/author <= 100, language/category <= 50, none empty
    - 1 <= no_of_pages <= 2**31 - 1, price >= 0
    - image_url must be an absolute http/https/ftp URL and is kept verbatim
"""

import pytest
from pydantic import ValidationError

from bookstore.schemas.book import BookCreate, BookResponse, BookUpdate


# --- accepted payloads --------------------------------------------------------

def test_camel_case_payload_accepted(dune_payload):
    book = BookCreate.model_validate(dune_payload)
    assert book.no_of_pages == 412
    assert book.image_url == "http://x/dune.jpg"


def test_snake_case_payload_accepted():
    book = BookCreate(
        title="Dune", author="Herbert", no_of_pages=412, language="English",
        category="SciFi", price=0, image_url="https://example.com/d.jpg",
    )
    assert book.price == 0


def test_create_ignores_client_id(make_payload):
    book = BookCreate.model_validate(make_payload(id=99))
    assert "id" not in book.model_dump()


def test_image_url_kept_verbatim(make_payload):
    book = BookCreate.model_validate(make_payload(imageUrl="http://x"))
    assert book.image_url == "http://x"


def test_response_serializes_camel_case(dune_payload):
    response = BookResponse.model_validate({**dune_payload, "id": 1})
    dumped = response.model_dump(by_alias=True)
    assert dumped["noOfPages"] == 412
    assert dumped["imageUrl"] == "http://x/dune.jpg"
    assert dumped["id"] == 1


# --- rejected payloads --------------------------------------------------------

@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "x" * 101},
        {"author": "x" * 101},
        {"language": "x" * 51},
        {"category": "x" * 51},
        {"noOfPages": 0},
        {"noOfPages": -3},
        {"noOfPages": 2**31},
        {"noOfPages": 2**63},
        {"price": -0.01},
        {"price": float("inf")},
        {"imageUrl": "not a url"},
        {"imageUrl": "/relative/path.jpg"},
        {"imageUrl": "mailto:someone@example.com"},
    ],
)
def test_constraint_violations_rejected(make_payload, overrides):
    with pytest.raises(ValidationError):
        BookCreate.model_validate(make_payload(**overrides))


@pytest.mark.parametrize(
    "missing", ["title", "author", "noOfPages", "language", "category", "price", "imageUrl"],
)
def test_missing_required_field_rejected(dune_payload, missing):
    payload = {k: v for k, v in dune_payload.items() if k != missing}
    with pytest.raises(ValidationError):
        BookCreate.model_validate(payload)


def test_boundary_lengths_accepted(make_payload):
    book = BookCreate.model_validate(
        make_payload(title="t" * 100, author="a" * 100, language="l" * 50, category="c" * 50),
    )
    assert len(book.title) == 100


def test_max_page_count_accepted(make_payload):
    book = BookCreate.model_validate(make_payload(noOfPages=2**31 - 1))
    assert book.no_of_pages == 2**31 - 1


def test_update_requires_id(dune_payload):
    with pytest.raises(ValidationError):
        BookUpdate.model_validate(dune_payload)
    assert BookUpdate.model_validate({**dune_payload, "id": 5}).id == 5
