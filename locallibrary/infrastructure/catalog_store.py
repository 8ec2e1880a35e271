"""Catalog Store: document-style persistence operations over the async session manager.

Invariants:
    - Each operation opens its own session: independent lookups may run under asyncio.gather
    - Writes commit immediately; there are no transactions spanning operations
    - find_by_id_and_update / find_by_id_and_delete return None for a missing record
    - insert_genre never stores two genres with the same case-insensitive name

Design Decisions:
    - Explicit handle passed to handlers (get_store dependency), no module-level store
    - Genre dedup race resolved by the unique name_key index: the loser of a concurrent
      insert returns the winner's record instead of failing
    - Book genre links updated by diff: unchanged links are kept, not deleted and re-added
"""

import logging
from typing import Any, Iterable, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from locallibrary.infrastructure import database as db_module
from locallibrary.infrastructure.database import DatabaseSessionManager
from locallibrary.models.book import Book, BookGenre, build_genre_links
from locallibrary.models.book_instance import BookInstance
from locallibrary.models.genre import Genre, genre_name_key

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class CatalogStore:
    """Store client handle; process-scoped engine, per-call sessions."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    # ─── Generic operations ──────────────────────────────────────

    async def insert(self, record: RecordT) -> RecordT:
        async with self._manager.session() as db:
            db.add(record)
            await db.commit()
        return record

    async def find_by_id(self, model: type[RecordT], record_id: UUID) -> RecordT | None:
        async with self._manager.session() as db:
            return await db.get(model, record_id)

    async def find(
        self, model: type[RecordT], *criteria: Any, order_by: Any = None,
    ) -> Sequence[RecordT]:
        query = select(model)
        if criteria:
            query = query.where(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        async with self._manager.session() as db:
            result = await db.execute(query)
            return result.scalars().all()

    async def find_by_ids(
        self, model: type[RecordT], record_ids: Iterable[UUID],
    ) -> Sequence[RecordT]:
        ids = {i for i in record_ids if i is not None}
        if not ids:
            return []
        return await self.find(model, model.id.in_(ids))

    async def count(self, model: type, *criteria: Any) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        async with self._manager.session() as db:
            result = await db.execute(query)
            return result.scalar_one()

    async def find_by_id_and_update(
        self, model: type[RecordT], record_id: UUID, values: dict,
    ) -> RecordT | None:
        async with self._manager.session() as db:
            record = await db.get(model, record_id)
            if record is None:
                return None
            for key, value in values.items():
                setattr(record, key, value)
            await db.commit()
            return record

    async def find_by_id_and_delete(
        self, model: type[RecordT], record_id: UUID,
    ) -> RecordT | None:
        async with self._manager.session() as db:
            record = await db.get(model, record_id)
            if record is None:
                return None
            await db.delete(record)
            await db.commit()
            return record

    # ─── Genre ───────────────────────────────────────────────────

    async def find_genre_by_name(self, name: str) -> Genre | None:
        """Case-insensitive name lookup."""
        async with self._manager.session() as db:
            result = await db.execute(
                select(Genre).where(Genre.name_key == genre_name_key(name)),
            )
            return result.scalar_one_or_none()

    async def insert_genre(self, genre: Genre) -> tuple[Genre, bool]:
        """Insert genre; (stored_genre, created). Returns the existing genre on a name clash."""
        async with self._manager.session() as db:
            db.add(genre)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                existing = await self.find_genre_by_name(genre.name)
                if existing is None:
                    raise
                logger.info(
                    "Genre insert lost race, using existing record",
                    extra={"entity": "genre", "record_id": str(existing.id)},
                )
                return existing, False
        return genre, True

    # ─── Book ────────────────────────────────────────────────────

    async def update_book(
        self, book_id: UUID, values: dict, genre_ids: Iterable[UUID],
    ) -> Book | None:
        async with self._manager.session() as db:
            book = await db.get(Book, book_id)
            if book is None:
                return None
            for key, value in values.items():
                setattr(book, key, value)
            current = {link.genre_id: link for link in book.genre_links}
            book.genre_links = [
                current.get(link.genre_id, link)
                for link in build_genre_links(genre_ids)
            ]
            await db.commit()
            return book

    async def books_by_author(self, author_id: UUID) -> Sequence[Book]:
        return await self.find(Book, Book.author_id == author_id, order_by=Book.title)

    async def books_in_genre(self, genre_id: UUID) -> Sequence[Book]:
        query = (
            select(Book)
            .join(BookGenre, BookGenre.book_id == Book.id)
            .where(BookGenre.genre_id == genre_id)
            .order_by(Book.title)
        )
        async with self._manager.session() as db:
            result = await db.execute(query)
            return result.scalars().all()

    async def instances_of_book(self, book_id: UUID) -> Sequence[BookInstance]:
        return await self.find(BookInstance, BookInstance.book_id == book_id)


async def get_store() -> CatalogStore:
    """FastAPI dependency for the catalog store."""
    if not db_module.db_manager:
        raise RuntimeError("Database not initialized")
    return CatalogStore(db_module.db_manager)
