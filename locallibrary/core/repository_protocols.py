"""Boundary Protocols: the store contract request handlers depend on.

Invariants:
    - Handlers only see this Protocol, never an AsyncSession
    - Every method is one independent store round-trip: concurrent calls are safe
    - Absent records come back as None; malformed ids are rejected before reaching the store

Design Decisions:
    - Protocol over ABC: the test doubles in tests/ need no inheritance
"""

from typing import Any, Iterable, Protocol, Sequence, TypeVar
from uuid import UUID

from locallibrary.models.book import Book
from locallibrary.models.book_instance import BookInstance
from locallibrary.models.genre import Genre

RecordT = TypeVar("RecordT")


class CatalogStoreProtocol(Protocol):
    """Contract for catalog persistence, implemented by infrastructure/catalog_store.py."""

    async def insert(self, record: RecordT) -> RecordT: ...
    async def find_by_id(self, model: type[RecordT], record_id: UUID) -> RecordT | None: ...
    async def find(
        self, model: type[RecordT], *criteria: Any, order_by: Any = None,
    ) -> Sequence[RecordT]: ...
    async def find_by_ids(
        self, model: type[RecordT], record_ids: Iterable[UUID],
    ) -> Sequence[RecordT]: ...
    async def count(self, model: type, *criteria: Any) -> int: ...
    async def find_by_id_and_update(
        self, model: type[RecordT], record_id: UUID, values: dict,
    ) -> RecordT | None: ...
    async def find_by_id_and_delete(
        self, model: type[RecordT], record_id: UUID,
    ) -> RecordT | None: ...

    async def find_genre_by_name(self, name: str) -> Genre | None: ...
    async def insert_genre(self, genre: Genre) -> tuple[Genre, bool]: ...
    async def update_book(
        self, book_id: UUID, values: dict, genre_ids: Iterable[UUID],
    ) -> Book | None: ...
    async def books_by_author(self, author_id: UUID) -> Sequence[Book]: ...
    async def books_in_genre(self, genre_id: UUID) -> Sequence[Book]: ...
    async def instances_of_book(self, book_id: UUID) -> Sequence[BookInstance]: ...
