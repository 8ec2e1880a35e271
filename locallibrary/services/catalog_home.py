"""Catalog Home: record counts for the landing page."""

import asyncio

from locallibrary.core.domain_types import BookInstanceStatus
from locallibrary.core.repository_protocols import CatalogStoreProtocol
from locallibrary.core.view_data import index_context
from locallibrary.models.author import Author
from locallibrary.models.book import Book
from locallibrary.models.book_instance import BookInstance
from locallibrary.models.genre import Genre
from locallibrary.services.outcomes import HandlerOutcome, Rendered


async def catalog_home(store: CatalogStoreProtocol, site_title: str) -> HandlerOutcome:
    """Counts fetched concurrently; any failure fails the page."""
    (
        book_count,
        book_instance_count,
        book_instance_available_count,
        author_count,
        genre_count,
    ) = await asyncio.gather(
        store.count(Book),
        store.count(BookInstance),
        store.count(
            BookInstance, BookInstance.status == BookInstanceStatus.AVAILABLE.value,
        ),
        store.count(Author),
        store.count(Genre),
    )
    return Rendered("index", index_context(
        {
            "book_count": book_count,
            "book_instance_count": book_instance_count,
            "book_instance_available_count": book_instance_available_count,
            "author_count": author_count,
            "genre_count": genre_count,
        },
        site_title,
    ))
