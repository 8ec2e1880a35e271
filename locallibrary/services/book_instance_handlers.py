"""BookInstance Handlers: list, detail, create, update, delete.

Invariants:
    - create and update share one rule set and one re-render contract
    - update keeps the path id: no new identifier is minted
    - update checks the path id (422) and that the copy exists (404) before writing
    - An empty status falls back to the default (Maintenance); other values are stored as escaped
    - The referenced book is not required to exist
"""

import asyncio
import logging
import uuid
from typing import Any, Mapping
from uuid import UUID

from locallibrary.core.derived_fields import book_instance_url
from locallibrary.core.domain_types import DEFAULT_INSTANCE_STATUS, parse_reference_token
from locallibrary.core.errors import ErrorContext, ResourceNotFoundError
from locallibrary.core.repository_protocols import CatalogStoreProtocol
from locallibrary.core.validation import ValidationResult, validate_book_instance_form
from locallibrary.core.view_data import (
    book_instance_list_context,
    book_instance_detail_context,
    book_instance_form_context,
    book_instance_delete_context,
)
from locallibrary.models.book import Book
from locallibrary.models.book_instance import BookInstance
from locallibrary.services.outcomes import HandlerOutcome, Redirect, Rendered
from locallibrary.services.references import optional_reference, require_reference

logger = logging.getLogger(__name__)

BOOK_INSTANCE_LIST_URL = "/catalog/bookinstances"


def _candidate(result: ValidationResult, instance_id: UUID) -> BookInstance:
    """In-memory copy built from sanitized input, valid or not."""
    return BookInstance(
        id=instance_id,
        book_id=parse_reference_token(result.sanitized["book"]),
        imprint=result.sanitized["imprint"],
        status=result.sanitized["status"] or DEFAULT_INSTANCE_STATUS.value,
        due_back=result.sanitized["due_back"],
    )


class BookInstanceHandlers:
    """Request handlers for the BookInstance entity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def _book_options(self):
        return await self.store.find(Book, order_by=Book.title)

    async def list_all(self) -> HandlerOutcome:
        instances = await self.store.find(BookInstance)
        books = await self.store.find_by_ids(Book, (i.book_id for i in instances))
        return Rendered(
            "bookinstance_list",
            book_instance_list_context(instances, {b.id: b for b in books}),
        )

    async def detail(self, raw_id: str) -> HandlerOutcome:
        instance_id = require_reference(raw_id, "bookinstance")
        instance = await self.store.find_by_id(BookInstance, instance_id)
        if instance is None:
            raise ResourceNotFoundError(
                "Book copy", str(instance_id), ErrorContext(entity="bookinstance"),
            )
        book = await self.store.find_by_id(Book, instance.book_id)
        return Rendered("bookinstance_detail", book_instance_detail_context(instance, book))

    async def create_form(self) -> HandlerOutcome:
        books = await self._book_options()
        return Rendered(
            "bookinstance_form",
            book_instance_form_context("Create BookInstance", books),
        )

    async def create(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        result = validate_book_instance_form(raw_fields)
        instance = _candidate(result, uuid.uuid4())

        if not result.is_valid:
            return await self._rerender("Create BookInstance", instance, result)

        await self.store.insert(instance)
        logger.info(
            "Book copy created",
            extra={"entity": "bookinstance", "record_id": str(instance.id)},
        )
        return Redirect(book_instance_url(instance))

    async def update_form(self, raw_id: str) -> HandlerOutcome:
        instance_id = require_reference(raw_id, "bookinstance")
        instance, books = await asyncio.gather(
            self.store.find_by_id(BookInstance, instance_id),
            self._book_options(),
        )
        if instance is None:
            raise ResourceNotFoundError(
                "Book copy", str(instance_id), ErrorContext(entity="bookinstance"),
            )
        return Rendered(
            "bookinstance_form",
            book_instance_form_context(
                "Update BookInstance", books, instance,
                selected_book=str(instance.book_id),
            ),
        )

    async def update(self, raw_id: str, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        instance_id = require_reference(raw_id, "bookinstance")
        result = validate_book_instance_form(raw_fields)
        instance = _candidate(result, instance_id)

        if not result.is_valid:
            return await self._rerender("Update BookInstance", instance, result)

        updated = await self.store.find_by_id_and_update(
            BookInstance, instance_id,
            {
                "book_id": instance.book_id,
                "imprint": instance.imprint,
                "status": instance.status,
                "due_back": instance.due_back,
            },
        )
        if updated is None:
            raise ResourceNotFoundError(
                "Book copy", str(instance_id), ErrorContext(entity="bookinstance"),
            )
        logger.info(
            "Book copy updated",
            extra={"entity": "bookinstance", "record_id": str(instance_id)},
        )
        return Redirect(book_instance_url(updated))

    async def _rerender(
        self, title: str, instance: BookInstance, result: ValidationResult,
    ) -> HandlerOutcome:
        logger.info(
            "Book copy form rejected",
            extra={"entity": "bookinstance", "violation_count": len(result.violations)},
        )
        books = await self._book_options()
        return Rendered(
            "bookinstance_form",
            book_instance_form_context(
                title, books, instance,
                selected_book=result.sanitized["book"] or None,
                errors=result.errors(),
            ),
        )

    async def delete_form(self, raw_id: str) -> HandlerOutcome:
        instance_id = optional_reference(raw_id)
        if instance_id is None:
            return Redirect(BOOK_INSTANCE_LIST_URL)
        instance = await self.store.find_by_id(BookInstance, instance_id)
        if instance is None:
            return Redirect(BOOK_INSTANCE_LIST_URL)
        book = await self.store.find_by_id(Book, instance.book_id)
        return Rendered("bookinstance_delete", book_instance_delete_context(instance, book))

    async def delete(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        instance_id = optional_reference(raw_fields.get("bookinstanceid"))
        if instance_id is not None:
            deleted = await self.store.find_by_id_and_delete(BookInstance, instance_id)
            logger.info(
                "Book copy deleted" if deleted else "Book copy delete: no such record",
                extra={"entity": "bookinstance", "record_id": str(instance_id)},
            )
        return Redirect(BOOK_INSTANCE_LIST_URL)
