"""Genre Handlers: list, detail, create (case-insensitive dedup), delete; update is a placeholder.

Invariants:
    - create with a name matching an existing genre (ignoring case) redirects to that
      genre and stores nothing
    - Two concurrent creates of the same name end on the same record (store unique index)
    - delete leaves books' genre links in place
"""

import asyncio
import logging
import uuid
from typing import Any, Mapping

from locallibrary.core.derived_fields import genre_url
from locallibrary.core.errors import ErrorContext, ResourceNotFoundError
from locallibrary.core.repository_protocols import CatalogStoreProtocol
from locallibrary.core.validation import validate_genre_form
from locallibrary.core.view_data import (
    genre_list_context,
    genre_detail_context,
    genre_form_context,
    genre_delete_context,
)
from locallibrary.models.genre import Genre
from locallibrary.services.outcomes import HandlerOutcome, PlainText, Redirect, Rendered
from locallibrary.services.references import optional_reference, require_reference

logger = logging.getLogger(__name__)

GENRE_LIST_URL = "/catalog/genres"


class GenreHandlers:
    """Request handlers for the Genre entity."""

    def __init__(self, store: CatalogStoreProtocol):
        self.store = store

    async def list_all(self) -> HandlerOutcome:
        genres = await self.store.find(Genre, order_by=Genre.name)
        return Rendered("genre_list", genre_list_context(genres))

    async def detail(self, raw_id: str) -> HandlerOutcome:
        genre_id = require_reference(raw_id, "genre")
        genre, books = await asyncio.gather(
            self.store.find_by_id(Genre, genre_id),
            self.store.books_in_genre(genre_id),
        )
        if genre is None:
            raise ResourceNotFoundError(
                "Genre", str(genre_id), ErrorContext(entity="genre"),
            )
        return Rendered("genre_detail", genre_detail_context(genre, books))

    async def create_form(self) -> HandlerOutcome:
        return Rendered("genre_form", genre_form_context("Create Genre"))

    async def create(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        result = validate_genre_form(raw_fields)
        genre = Genre(id=uuid.uuid4(), name=result.sanitized["name"])

        if not result.is_valid:
            logger.info(
                "Genre form rejected",
                extra={"entity": "genre", "violation_count": len(result.violations)},
            )
            return Rendered(
                "genre_form",
                genre_form_context("Create Genre", genre, result.errors()),
            )

        existing = await self.store.find_genre_by_name(genre.name)
        if existing is not None:
            logger.info(
                "Genre already exists, redirecting",
                extra={"entity": "genre", "record_id": str(existing.id)},
            )
            return Redirect(genre_url(existing))

        stored, created = await self.store.insert_genre(genre)
        if created:
            logger.info(
                "Genre created", extra={"entity": "genre", "record_id": str(stored.id)},
            )
        return Redirect(genre_url(stored))

    async def delete_form(self, raw_id: str) -> HandlerOutcome:
        genre_id = optional_reference(raw_id)
        if genre_id is None:
            return Redirect(GENRE_LIST_URL)
        genre, books = await asyncio.gather(
            self.store.find_by_id(Genre, genre_id),
            self.store.books_in_genre(genre_id),
        )
        if genre is None:
            return Redirect(GENRE_LIST_URL)
        return Rendered("genre_delete", genre_delete_context(genre, books))

    async def delete(self, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        genre_id = optional_reference(raw_fields.get("genreid"))
        if genre_id is not None:
            deleted = await self.store.find_by_id_and_delete(Genre, genre_id)
            logger.info(
                "Genre deleted" if deleted else "Genre delete: no such record",
                extra={"entity": "genre", "record_id": str(genre_id)},
            )
        return Redirect(GENRE_LIST_URL)

    async def update_form(self, raw_id: str) -> HandlerOutcome:
        return PlainText("NOT IMPLEMENTED: Genre update GET")

    async def update(self, raw_id: str, raw_fields: Mapping[str, Any]) -> HandlerOutcome:
        return PlainText("NOT IMPLEMENTED: Genre update POST")
