"""Derived Fields: verifies names, URLs, lifespans and date renderings.

Tests cover:
    - author_name needs both names
    - lifespan uses "N/A" per missing side
    - medium dates in English regardless of locale
    - due_back renderings for present and absent dates
"""

from datetime import date
from types import SimpleNamespace
from uuid import uuid4

from locallibrary.core.derived_fields import (
    author_date_of_birth_formatted,
    author_lifespan,
    author_name,
    author_url,
    book_genre_ids,
    book_instance_due_back_formatted,
    book_instance_due_back_yyyy_mm_dd,
    book_instance_url,
    book_url,
    format_medium_date,
    genre_url,
)


def _author(**kw):
    base = dict(
        id=uuid4(), first_name="Isaac", family_name="Asimov",
        date_of_birth=None, date_of_death=None,
    )
    base.update(kw)
    return SimpleNamespace(**base)


def test_format_medium_date():
    assert format_medium_date(date(2020, 10, 6)) == "Oct 6, 2020"


def test_author_name_family_first():
    assert author_name(_author()) == "Asimov, Isaac"


def test_author_name_empty_when_a_name_missing():
    assert author_name(_author(first_name="")) == ""
    assert author_name(_author(family_name="")) == ""


def test_author_url():
    author = _author()
    assert author_url(author) == f"/catalog/author/{author.id}"


def test_author_lifespan_both_dates():
    author = _author(date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6))
    assert author_lifespan(author) == "Jan 2, 1920 - Apr 6, 1992"


def test_author_lifespan_missing_dates():
    assert author_lifespan(_author()) == "N/A - N/A"
    assert author_lifespan(_author(date_of_birth=date(1920, 1, 2))) == "Jan 2, 1920 - N/A"


def test_author_date_formatted_for_inputs():
    assert author_date_of_birth_formatted(_author(date_of_birth=date(1920, 1, 2))) == "1920-01-02"
    assert author_date_of_birth_formatted(_author()) is None


def test_genre_and_book_urls():
    record = SimpleNamespace(id=uuid4())
    assert genre_url(record) == f"/catalog/genre/{record.id}"
    assert book_url(record) == f"/catalog/book/{record.id}"
    assert book_instance_url(record) == f"/catalog/bookinstance/{record.id}"


def test_book_genre_ids_as_strings():
    g1, g2 = uuid4(), uuid4()
    book = SimpleNamespace(genre_links=[SimpleNamespace(genre_id=g1), SimpleNamespace(genre_id=g2)])
    assert book_genre_ids(book) == [str(g1), str(g2)]
    assert book_genre_ids(SimpleNamespace(genre_links=None)) == []


def test_due_back_renderings():
    instance = SimpleNamespace(due_back=date(2020, 10, 6))
    assert book_instance_due_back_formatted(instance) == "Oct 6, 2020"
    assert book_instance_due_back_yyyy_mm_dd(instance) == "2020-10-06"


def test_due_back_absent():
    instance = SimpleNamespace(due_back=None)
    assert book_instance_due_back_formatted(instance) == ""
    assert book_instance_due_back_yyyy_mm_dd(instance) is None
