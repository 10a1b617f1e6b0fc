"""Book Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - title/author: 1-100 chars; language/category: 1-50 chars
    - 1 <= no_of_pages <= 2**31 - 1; price >= 0 and finite
    - image_url is an absolute http/https/ftp URL, stored exactly as sent
    - JSON keys are camelCase on the wire; snake_case is accepted on input
    - BookCreate ignores any client-sent id (the store assigns it)

Design Decisions:
    - BookUpdate carries id so the route can reject path/body mismatches
    - AnyUrl used only to check the value; the original string is kept
"""

from pydantic import (
    AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from bookstore.core.domain_types import (
    TITLE_MAX_LENGTH, AUTHOR_MAX_LENGTH, LANGUAGE_MAX_LENGTH,
    CATEGORY_MAX_LENGTH, IMAGE_URL_MAX_LENGTH, IMAGE_URL_SCHEMES,
    MIN_PAGES, MAX_PAGES, MIN_PRICE,
)

_url_adapter = TypeAdapter(AnyUrl)


class BookBase(BaseModel):
    """Fields shared by every Book payload."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    author: str = Field(min_length=1, max_length=AUTHOR_MAX_LENGTH)
    no_of_pages: int = Field(ge=MIN_PAGES, le=MAX_PAGES)
    language: str = Field(min_length=1, max_length=LANGUAGE_MAX_LENGTH)
    category: str = Field(min_length=1, max_length=CATEGORY_MAX_LENGTH)
    price: float = Field(ge=MIN_PRICE, allow_inf_nan=False)
    image_url: str = Field(min_length=1, max_length=IMAGE_URL_MAX_LENGTH)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        try:
            url = _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("imageUrl must be a valid absolute URL") from None
        if url.scheme not in IMAGE_URL_SCHEMES or not url.host:
            raise ValueError("imageUrl must use http, https or ftp and name a host")
        return v


class BookCreate(BookBase):
    """Book creation payload — id, if sent, is ignored."""


class BookUpdate(BookBase):
    """Full-record replacement — every field overwritten, id must match the path."""
    id: int


class BookResponse(BookBase):
    """Book as returned to clients."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: int
