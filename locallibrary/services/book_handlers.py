"""Book Handlers: list, detail, create, update, delete.

Invariants:
    - The form offers every author (by family name) and every genre (by name)
    - create and update share one rule set and one re-render contract
    - update keeps the path id and checks it (422) and the book's existence (404)
    - delete removes the book and its genre links only; its copies keep a dangling reference
"""

import asyncio
import logging
import uuid
from typing import Any, Mapping
from uuid import UUID

from locallibrary.core.derived_fields import book_url
from locallibrary.core.domain_types import parse_reference_token
from locallibrary.core.errors import ErrorContext, ResourceNotFoundError
from locallibrary.core.repository_protocols import CatalogStoreProtocol
from locallibrary.core.validation import ValidationResult, validate_book_form
from locallibrary.core.view_data import (
    book_list_context,
    book_detail_context,
    book_form_context,
    book_delete_context,
)
from locallibrary.models.author import Author
from locallibrary.models.book import Book, build_genre_links
from locallibrary.models.genre import Genre
from locallibrary.services.outcomes import HandlerOutcome, Redirect, Rendered
from locallibrary.services.references import optional_reference, require_reference

logger = logging.getLogger(__name__)

BOOK_LIST_URL = "/catalog/books"


def _genre_ids(result: ValidationResult) -> list[UUID]:
    parsed = (parse_reference_token(g) for g in result.sanitized["genre"])
    return [g for g in parsed if g is not None]


def _candidate(result: ValidationResult, book_id: UUID) -> Book:
    """In-memory book built from sanitized input, valid or not."""
    return Book(
        id=book_id,
        title=result.sanitized["title"],
        author_id=parse_reference_token(result.sanitized["author"]),
        summary=result.sanitized["summary"],
        isbn=result.sanitized["isbn"],
        genre_links=build_genre_links(_genre_ids(result)),
    )


class BookHandlers:
    """Request handlers for the Book entity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def _form_options(self):
        return await asyncio.gather(
            self.store.find(Author, order_by=Author.family_name),
            self.store.find(Genre, order_by=Genre.name),
        )

    async def list_all(self) -> HandlerOutcome:
        books = await self.store.find(Book, order_by=Book.title)
        authors = await self.store.find_by_ids(Author, (b.author_id for b in books))
        return Rendered(
            "book_list", book_list_context(books, {a.id: a for a in authors}),
        )

    async def detail(self, raw_id: str) -> HandlerOutcome:
        book_id = require_reference(raw_id, "book")
        book, instances = await asyncio.gather(
            self.store.find_by_id(Book, book_id),
            self.store.instances_of_book(book_id),
        )
        if book is None:
            raise ResourceNotFoundError(
                "Book", str(book_id), ErrorContext(entity="book"),
            )
        author, genres = await asyncio.gather(
            self.store.find_by_id(Author, book.author_id),
            self.store.find_by_ids(Genre, (link.genre_id for link in book.genre_links)),
        )
        return Rendered(
            "book_detail", book_detail_context(book, author, genres, instances),
        )

    async def create_form(self) -> HandlerOutcome:
        authors, genres = await self._form_options()
        return Rendered("book_form", book_form_context("Create Book", authors, genres))

    async def create(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        result = validate_book_form(raw_fields)
        book = _candidate(result, uuid.uuid4())

        if not result.is_valid:
            return await self._rerender("Create Book", book, result)

        await self.store.insert(book)
        logger.info("Book created", extra={"entity": "book", "record_id": str(book.id)})
        return Redirect(book_url(book))

    async def update_form(self, raw_id: str) -> HandlerOutcome:
        book_id = require_reference(raw_id, "book")
        book, (authors, genres) = await asyncio.gather(
            self.store.find_by_id(Book, book_id),
            self._form_options(),
        )
        if book is None:
            raise ResourceNotFoundError(
                "Book", str(book_id), ErrorContext(entity="book"),
            )
        return Rendered(
            "book_form", book_form_context("Update Book", authors, genres, book),
        )

    async def update(self, raw_id: str, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        book_id = require_reference(raw_id, "book")
        result = validate_book_form(raw_fields)
        book = _candidate(result, book_id)

        if not result.is_valid:
            return await self._rerender("Update Book", book, result)

        updated = await self.store.update_book(
            book_id,
            {
                "title": book.title,
                "author_id": book.author_id,
                "summary": book.summary,
                "isbn": book.isbn,
            },
            _genre_ids(result),
        )
        if updated is None:
            raise ResourceNotFoundError(
                "Book", str(book_id), ErrorContext(entity="book"),
            )
        logger.info("Book updated", extra={"entity": "book", "record_id": str(book_id)})
        return Redirect(book_url(updated))

    async def _rerender(
        self, title: str, book: Book, result: ValidationResult,
    ) -> HandlerOutcome:
        logger.info(
            "Book form rejected",
            extra={"entity": "book", "violation_count": len(result.violations)},
        )
        authors, genres = await self._form_options()
        return Rendered(
            "book_form",
            book_form_context(title, authors, genres, book, result.errors()),
        )

    async def delete_form(self, raw_id: str) -> HandlerOutcome:
        book_id = optional_reference(raw_id)
        if book_id is None:
            return Redirect(BOOK_LIST_URL)
        book, instances = await asyncio.gather(
            self.store.find_by_id(Book, book_id),
            self.store.instances_of_book(book_id),
        )
        if book is None:
            return Redirect(BOOK_LIST_URL)
        return Rendered("book_delete", book_delete_context(book, instances))

    async def delete(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        book_id = optional_reference(raw_fields.get("bookid"))
        if book_id is not None:
            deleted = await self.store.find_by_id_and_delete(Book, book_id)
            logger.info(
                "Book deleted" if deleted else "Book delete: no such record",
                extra={"entity": "book", "record_id": str(book_id)},
            )
        return Redirect(BOOK_LIST_URL)
