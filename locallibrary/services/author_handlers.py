"""Author Handlers: list, detail, create, delete; update is a placeholder.

Invariants:
    - detail rejects a malformed id (422) before touching the store
    - create re-renders the form with status 200 and every violation when input is invalid
    - delete never cascades: the author's books keep their (now dangling) author reference
    - delete redirects to the list whether or not the author existed
"""

import asyncio
import logging
import uuid
from typing import Any, Mapping

from locallibrary.core.derived_fields import author_url
from locallibrary.core.errors import ErrorContext, ResourceNotFoundError
from locallibrary.core.repository_protocols import CatalogStoreProtocol
from locallibrary.core.validation import validate_author_form
from locallibrary.core.view_data import (
    author_list_context,
    author_detail_context,
    author_form_context,
    author_delete_context,
)
from locallibrary.models.author import Author
from locallibrary.services.outcomes import HandlerOutcome, PlainText, Redirect, Rendered
from locallibrary.services.references import optional_reference, require_reference

logger = logging.getLogger(__name__)

AUTHOR_LIST_URL = "/catalog/authors"


class AuthorHandlers:
    """Request handlers for the Author entity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def list_all(self) -> HandlerOutcome:
        authors = await self.store.find(Author, order_by=Author.family_name)
        return Rendered("author_list", author_list_context(authors))

    async def detail(self, raw_id: str) -> HandlerOutcome:
        author_id = require_reference(raw_id, "author")
        author, books = await asyncio.gather(
            self.store.find_by_id(Author, author_id),
            self.store.books_by_author(author_id),
        )
        if author is None:
            raise ResourceNotFoundError(
                "Author", str(author_id), ErrorContext(entity="author"),
            )
        return Rendered("author_detail", author_detail_context(author, books))

    async def create_form(self) -> HandlerOutcome:
        return Rendered("author_form", author_form_context("Create Author"))

    async def create(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        result = validate_author_form(raw_fields)
        author = Author(
            id=uuid.uuid4(),
            first_name=result.sanitized["first_name"],
            family_name=result.sanitized["family_name"],
            date_of_birth=result.sanitized["date_of_birth"],
            date_of_death=result.sanitized["date_of_death"],
        )

        if not result.is_valid:
            logger.info(
                "Author form rejected",
                extra={"entity": "author", "violation_count": len(result.violations)},
            )
            return Rendered(
                "author_form",
                author_form_context("Create Author", author, result.errors()),
            )

        await self.store.insert(author)
        logger.info(
            "Author created", extra={"entity": "author", "record_id": str(author.id)},
        )
        return Redirect(author_url(author))

    async def delete_form(self, raw_id: str) -> HandlerOutcome:
        author_id = optional_reference(raw_id)
        if author_id is None:
            return Redirect(AUTHOR_LIST_URL)
        author, books = await asyncio.gather(
            self.store.find_by_id(Author, author_id),
            self.store.books_by_author(author_id),
        )
        if author is None:
            return Redirect(AUTHOR_LIST_URL)
        return Rendered("author_delete", author_delete_context(author, books))

    async def delete(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        author_id = optional_reference(raw_fields.get("authorid"))
        if author_id is not None:
            deleted = await self.store.find_by_id_and_delete(Author, author_id)
            logger.info(
                "Author deleted" if deleted else "Author delete: no such record",
                extra={"entity": "author", "record_id": str(author_id)},
            )
        return Redirect(AUTHOR_LIST_URL)

    async def update_form(self, raw_id: str) -> HandlerOutcome:
        return PlainText("NOT IMPLEMENTED: Author update GET")

    async def update(self, raw_id: str, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        return PlainText("NOT IMPLEMENTED: Author update POST")
