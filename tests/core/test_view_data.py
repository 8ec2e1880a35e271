"""View Data Assembly: verifies the data bags handed to templates.

Tests cover:
    - Record views carry derived fields
    - Dangling references render as None
    - Book form marks the book's genres as checked
    - BookInstance form carries statuses and the selected book
"""

from datetime import date
from types import SimpleNamespace
from uuid import uuid4

from locallibrary.core.view_data import (
    author_detail_context,
    author_view,
    book_form_context,
    book_instance_form_context,
    book_instance_list_context,
    book_list_context,
    index_context,
)


def _author():
    return SimpleNamespace(
        id=uuid4(), first_name="Ursula", family_name="Le Guin",
        date_of_birth=date(1929, 10, 21), date_of_death=None,
    )


def _book(author_id=None, genre_ids=()):
    return SimpleNamespace(
        id=uuid4(), title="Earthsea", summary="Wizards.", isbn="123",
        author_id=author_id or uuid4(),
        genre_links=[SimpleNamespace(genre_id=g) for g in genre_ids],
    )


def test_author_view_includes_derived_fields():
    author = _author()
    view = author_view(author)
    assert view["name"] == "Le Guin, Ursula"
    assert view["url"] == f"/catalog/author/{author.id}"
    assert view["lifespan"] == "Oct 21, 1929 - N/A"
    assert view["date_of_birth_formatted"] == "1929-10-21"


def test_author_detail_lists_books():
    author = _author()
    book = _book(author.id)
    ctx = author_detail_context(author, [book])
    assert ctx["title"] == "Author detail"
    assert ctx["author_books"][0]["title"] == "Earthsea"


def test_book_list_with_dangling_author():
    ctx = book_list_context([_book()], {})
    assert ctx["book_list"][0]["author"] is None


def test_book_form_marks_checked_genres():
    g1 = SimpleNamespace(id=uuid4(), name="Fantasy")
    g2 = SimpleNamespace(id=uuid4(), name="Poetry")
    book = _book(genre_ids=[g2.id])
    ctx = book_form_context("Update Book", [], [g1, g2], book)
    assert [g["checked"] for g in ctx["genres"]] == [False, True]
    assert ctx["errors"] == []


def test_book_instance_form_context():
    book = _book()
    ctx = book_instance_form_context(
        "Create BookInstance", [book], selected_book=str(book.id),
    )
    assert ctx["statuses"] == ["Available", "Maintenance", "Loaned", "Reserved"]
    assert ctx["selected_book"] == str(book.id)
    assert ctx["bookinstance"] is None
    assert ctx["book_list"][0]["id"] == str(book.id)


def test_book_instance_list_resolves_books():
    book = _book()
    instance = SimpleNamespace(
        id=uuid4(), book_id=book.id, imprint="X", status="Loaned",
        due_back=date(2020, 10, 6),
    )
    ctx = book_instance_list_context([instance], {book.id: book})
    row = ctx["bookinstance_list"][0]
    assert row["book"]["title"] == "Earthsea"
    assert row["due_back_formatted"] == "Oct 6, 2020"


def test_index_context():
    ctx = index_context({"book_count": 3}, "Local Library")
    assert ctx == {"title": "Local Library Home", "data": {"book_count": 3}}
