"""Store Results — explicit outcome types returned by every data-access operation.

Invariants:
    - Exactly one of Found / NotFound / Failed per operation
    - NotFound is never an empty Found (no null-as-absence)
    - unwrap() returns the value or raises the matching BookstoreError

Design Decisions:
    - Frozen dataclasses over exceptions at the service boundary; routes
      decide how each branch maps to HTTP
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from bookstore.core.errors import BookNotFoundError, DatabaseError

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """Operation succeeded with a value."""
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class NotFound:
    """Operation targeted an Id the store does not hold."""
    resource_id: int

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise BookNotFoundError(self.resource_id)


@dataclass(frozen=True)
class Failed:
    """The store raised; the transaction was rolled back."""
    error: DatabaseError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


StoreResult = Union[Found[T], NotFound, Failed]
