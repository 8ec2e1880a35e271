"""Book ORM: a title in the catalog, with its genre links.

Invariants:
    - title, summary, isbn are non-nullable
    - author_id is a bare reference: no FK constraint, the author may not exist
    - genre links belong to the book (deleted with it); genre_id is a bare reference

Design Decisions:
    - BookGenre link table over a JSON array: "books in genre X" stays a plain indexed query
    - genre_links loaded with selectin: records are used after their session closes
"""

import uuid
from typing import Iterable

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from locallibrary.db.base import Base


class Book(Base):
    """Book record."""
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(String(50), nullable=False)

    genre_links: Mapped[list["BookGenre"]] = relationship(
        "BookGenre", back_populates="book",
        cascade="all, delete-orphan", lazy="selectin",
    )


class BookGenre(Base):
    """Link between a book and one genre reference."""
    __tablename__ = "book_genres"

    book_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, index=True,
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genre_links")


def build_genre_links(genre_ids: Iterable[uuid.UUID]) -> list[BookGenre]:
    """One link per distinct genre, in first-seen order."""
    seen: list[uuid.UUID] = []
    for genre_id in genre_ids:
        if genre_id not in seen:
            seen.append(genre_id)
    return [BookGenre(genre_id=g) for g in seen]
