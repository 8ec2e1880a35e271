"""Derived Fields: values computed from stored record fields, never persisted.

Invariants:
    - All functions are PURE: take a record (or date), return a value
    - Accept any object with the right attributes (ORM row or in-memory candidate)
    - Medium dates render as "Oct 6, 2020", English month names regardless of process locale
"""

from datetime import date
from typing import Any

CATALOG_PREFIX = "/catalog"

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_medium_date(value: date) -> str:
    return f"{_MONTH_ABBR[value.month - 1]} {value.day}, {value.year}"


def format_iso_date(value: date | None) -> str | None:
    """YYYY-MM-DD for <input type="date"> pre-population."""
    return value.isoformat() if value else None


# ─── Author ──────────────────────────────────────────────────────

def author_name(author: Any) -> str:
    """Full name as 'family, first', or '' when either name is missing."""
    if author.first_name and author.family_name:
        return f"{author.family_name}, {author.first_name}"
    return ""


def author_url(author: Any) -> str:
    return f"{CATALOG_PREFIX}/author/{author.id}"


def author_lifespan(author: Any) -> str:
    """Birth and death as medium dates, "N/A" for each missing side."""
    born = format_medium_date(author.date_of_birth) if author.date_of_birth else "N/A"
    died = format_medium_date(author.date_of_death) if author.date_of_death else "N/A"
    return f"{born} - {died}"


def author_date_of_birth_formatted(author: Any) -> str | None:
    return format_iso_date(author.date_of_birth)


def author_date_of_death_formatted(author: Any) -> str | None:
    return format_iso_date(author.date_of_death)


# ─── Genre / Book ────────────────────────────────────────────────

def genre_url(genre: Any) -> str:
    return f"{CATALOG_PREFIX}/genre/{genre.id}"


def book_url(book: Any) -> str:
    return f"{CATALOG_PREFIX}/book/{book.id}"


def book_genre_ids(book: Any) -> list[str]:
    """Genre references of a book as strings, in link order."""
    return [str(link.genre_id) for link in (book.genre_links or [])]


# ─── BookInstance ────────────────────────────────────────────────

def book_instance_url(instance: Any) -> str:
    return f"{CATALOG_PREFIX}/bookinstance/{instance.id}"


def book_instance_due_back_formatted(instance: Any) -> str:
    return format_medium_date(instance.due_back) if instance.due_back else ""


def book_instance_due_back_yyyy_mm_dd(instance: Any) -> str | None:
    return format_iso_date(instance.due_back)
