"""View Data Assembly: shapes records into the data bags the templates render.

Invariants:
    - All functions are PURE: records in, plain dicts out
    - Every record view carries its derived fields (url, name, lifespan, ...)
    - Data-bag keys (title, author, author_list, errors, selected_book, ...) are the
      contract with the templates in locallibrary/templates/
    - A missing referent (dangling reference) renders as None, never raises

Design Decisions:
    - Templates never call derivation functions: every value they print is in the bag
"""

from typing import Any, Iterable, Mapping
from uuid import UUID

from locallibrary.core.derived_fields import (
    author_name,
    author_url,
    author_lifespan,
    author_date_of_birth_formatted,
    author_date_of_death_formatted,
    genre_url,
    book_url,
    book_genre_ids,
    book_instance_url,
    book_instance_due_back_formatted,
    book_instance_due_back_yyyy_mm_dd,
)
from locallibrary.core.domain_types import BookInstanceStatus


def _id(record: Any) -> str | None:
    return str(record.id) if record.id is not None else None


def _ref(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


# ─── Record views ────────────────────────────────────────────────

def author_view(author: Any | None) -> dict | None:
    if author is None:
        return None
    return {
        "id": _id(author),
        "first_name": author.first_name,
        "family_name": author.family_name,
        "date_of_birth": author.date_of_birth,
        "date_of_death": author.date_of_death,
        "name": author_name(author),
        "url": author_url(author),
        "lifespan": author_lifespan(author),
        "date_of_birth_formatted": author_date_of_birth_formatted(author),
        "date_of_death_formatted": author_date_of_death_formatted(author),
    }


def genre_view(genre: Any | None) -> dict | None:
    if genre is None:
        return None
    return {"id": _id(genre), "name": genre.name, "url": genre_url(genre)}


def book_view(
    book: Any | None,
    author: Any | None = None,
    genres: Iterable[Any] = (),
) -> dict | None:
    if book is None:
        return None
    return {
        "id": _id(book),
        "title": book.title,
        "summary": book.summary,
        "isbn": book.isbn,
        "url": book_url(book),
        "author_id": _ref(book.author_id),
        "author": author_view(author),
        "genre_ids": book_genre_ids(book),
        "genres": [genre_view(g) for g in genres],
    }


def book_summary_view(book: Any) -> dict:
    """Title/summary/url only: what the author, genre and delete pages list."""
    return {
        "id": _id(book),
        "title": book.title,
        "summary": book.summary,
        "url": book_url(book),
    }


def book_instance_view(instance: Any | None, book: Any | None = None) -> dict | None:
    if instance is None:
        return None
    return {
        "id": _id(instance),
        "book_id": _ref(instance.book_id),
        "book": book_view(book),
        "imprint": instance.imprint,
        "status": instance.status,
        "due_back": instance.due_back,
        "due_back_formatted": book_instance_due_back_formatted(instance),
        "due_back_yyyy_mm_dd": book_instance_due_back_yyyy_mm_dd(instance),
        "url": book_instance_url(instance),
    }


# ─── Home ────────────────────────────────────────────────────────

def index_context(counts: Mapping[str, int], site_title: str) -> dict:
    return {"title": f"{site_title} Home", "data": dict(counts)}


# ─── Author pages ────────────────────────────────────────────────

def author_list_context(authors: Iterable[Any]) -> dict:
    return {
        "title": "Author List",
        "author_list": [author_view(a) for a in authors],
    }


def author_detail_context(author: Any, books: Iterable[Any]) -> dict:
    return {
        "title": "Author detail",
        "author": author_view(author),
        "author_books": [book_summary_view(b) for b in books],
    }


def author_form_context(
    title: str, author: Any | None = None, errors: list[dict] | None = None,
) -> dict:
    return {"title": title, "author": author_view(author), "errors": errors or []}


def author_delete_context(author: Any, books: Iterable[Any]) -> dict:
    return {
        "title": "Delete Author",
        "author": author_view(author),
        "author_books": [book_summary_view(b) for b in books],
    }


# ─── Genre pages ─────────────────────────────────────────────────

def genre_list_context(genres: Iterable[Any]) -> dict:
    return {"title": "Genre List", "genre_list": [genre_view(g) for g in genres]}


def genre_detail_context(genre: Any, books: Iterable[Any]) -> dict:
    return {
        "title": "Genre detail",
        "genre": genre_view(genre),
        "genre_books": [book_summary_view(b) for b in books],
    }


def genre_form_context(
    title: str, genre: Any | None = None, errors: list[dict] | None = None,
) -> dict:
    return {"title": title, "genre": genre_view(genre), "errors": errors or []}


def genre_delete_context(genre: Any, books: Iterable[Any]) -> dict:
    return {
        "title": "Delete Genre",
        "genre": genre_view(genre),
        "genre_books": [book_summary_view(b) for b in books],
    }


# ─── Book pages ──────────────────────────────────────────────────

def book_list_context(
    books: Iterable[Any], authors_by_id: Mapping[UUID, Any],
) -> dict:
    return {
        "title": "Book List",
        "book_list": [
            book_view(b, authors_by_id.get(b.author_id)) for b in books
        ],
    }


def book_detail_context(
    book: Any,
    author: Any | None,
    genres: Iterable[Any],
    instances: Iterable[Any],
) -> dict:
    return {
        "title": book.title,
        "book": book_view(book, author, genres),
        "book_instances": [book_instance_view(i) for i in instances],
    }


def book_form_context(
    title: str,
    authors: Iterable[Any],
    genres: Iterable[Any],
    book: Any | None = None,
    errors: list[dict] | None = None,
) -> dict:
    """Form data bag; genres carry a `checked` flag for the book's current genres."""
    selected = set(book_genre_ids(book)) if book is not None else set()
    genre_options = []
    for genre in genres:
        option = genre_view(genre)
        option["checked"] = option["id"] in selected
        genre_options.append(option)
    return {
        "title": title,
        "authors": [author_view(a) for a in authors],
        "genres": genre_options,
        "book": book_view(book),
        "errors": errors or [],
    }


def book_delete_context(book: Any, instances: Iterable[Any]) -> dict:
    return {
        "title": "Delete Book",
        "book": book_view(book),
        "book_instances": [book_instance_view(i) for i in instances],
    }


# ─── BookInstance pages ──────────────────────────────────────────

def book_instance_list_context(
    instances: Iterable[Any], books_by_id: Mapping[UUID, Any],
) -> dict:
    return {
        "title": "Book Instance List",
        "bookinstance_list": [
            book_instance_view(i, books_by_id.get(i.book_id)) for i in instances
        ],
    }


def book_instance_detail_context(instance: Any, book: Any | None) -> dict:
    return {
        "title": "Book",
        "bookinstance": book_instance_view(instance, book),
    }


def book_instance_form_context(
    title: str,
    books: Iterable[Any],
    bookinstance: Any | None = None,
    selected_book: str | None = None,
    errors: list[dict] | None = None,
) -> dict:
    return {
        "title": title,
        "book_list": [book_summary_view(b) for b in books],
        "bookinstance": book_instance_view(bookinstance),
        "selected_book": selected_book,
        "statuses": [s.value for s in BookInstanceStatus],
        "errors": errors or [],
    }


def book_instance_delete_context(instance: Any, book: Any | None) -> dict:
    return {
        "title": "Delete Book Instance",
        "bookinstance": book_instance_view(instance, book),
    }
