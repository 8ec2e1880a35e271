"""Author ORM: a person credited on one or more books.

Invariants:
    - first_name and family_name are non-nullable, at most 100 chars
    - date_of_birth / date_of_death are optional calendar dates
    - Derived fields (name, url, lifespan) are NOT columns: see core/derived_fields.py
"""

import uuid
from datetime import date

from sqlalchemy import String, Date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from locallibrary.db.base import Base


class Author(Base):
    """Author record."""
    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[date | None] = mapped_column(Date, nullable=True)
