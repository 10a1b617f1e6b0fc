"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BookId wraps the store-assigned integer key
    - Field limits are declared once here and shared by ORM columns and schemas
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", int)


# ─── Field Limits ────────────────────────────────────────────────

TITLE_MAX_LENGTH = 100
AUTHOR_MAX_LENGTH = 100
LANGUAGE_MAX_LENGTH = 50
CATEGORY_MAX_LENGTH = 50
IMAGE_URL_MAX_LENGTH = 2048
MIN_PAGES = 1
MAX_PAGES = 2**31 - 1
MIN_PRICE = 0.0

IMAGE_URL_SCHEMES = frozenset({"http", "https", "ftp"})


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods a gateway route may accept."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
