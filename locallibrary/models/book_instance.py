"""BookInstance ORM: one physical copy of a book.

Invariants:
    - book_id is a bare reference: no FK constraint, the book may not exist
    - imprint is non-nullable
    - status holds a BookInstanceStatus value, Maintenance by default (CHECK constraint)
    - due_back is optional
"""

import uuid
from datetime import date

from sqlalchemy import CheckConstraint, String, Date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from locallibrary.core.domain_types import BookInstanceStatus, DEFAULT_INSTANCE_STATUS
from locallibrary.db.base import Base


_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in BookInstanceStatus)


class BookInstance(Base):
    """BookInstance record."""
    __tablename__ = "book_instances"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({_STATUS_VALUES})",
            name="ck_book_instances_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    imprint: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_INSTANCE_STATUS.value,
    )
    due_back: Mapped[date | None] = mapped_column(Date, nullable=True)
