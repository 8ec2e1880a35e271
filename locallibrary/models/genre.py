"""Genre ORM: a category books are filed under.

Invariants:
    - name is 3-100 chars, stored as submitted (escaped)
    - name_key is the casefolded name and is unique: one genre per case-insensitive name
    - name_key is Text: casefolding can lengthen a name (e.g. "ß" -> "ss")
    - name_key is kept in sync on every assignment to name

Design Decisions:
    - name_key column instead of a DB collation: same behavior on PostgreSQL and SQLite,
      and the unique index closes the lookup-then-insert race in genre creation
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from locallibrary.db.base import Base


def genre_name_key(name: str) -> str:
    """Normalized comparison key for case-insensitive name equality."""
    return name.strip().casefold()


class Genre(Base):
    """Genre record."""
    __tablename__ = "genres"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(
        Text, nullable=False, unique=True, index=True,
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        self.name_key = genre_name_key(value or "")
        return value
