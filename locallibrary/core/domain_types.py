"""Domain Types: identity types, enums and the reference-token check.

Invariants:
    - AuthorId, GenreId, BookId, BookInstanceId wrap UUIDs
    - A reference token is well-formed iff it parses as a UUID
    - BookInstanceStatus values are the exact strings shown in forms and stored in the DB

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to the raw form value without conversion
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AuthorId = NewType("AuthorId", UUID)
GenreId = NewType("GenreId", UUID)
BookId = NewType("BookId", UUID)
BookInstanceId = NewType("BookInstanceId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class BookInstanceStatus(str, Enum):
    """Availability of a physical copy."""
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


DEFAULT_INSTANCE_STATUS = BookInstanceStatus.MAINTENANCE


# ─── Reference Tokens ────────────────────────────────────────────

def is_valid_reference_token(value: object) -> bool:
    """True if value is a UUID or a string that parses as one."""
    if isinstance(value, UUID):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def parse_reference_token(value: str) -> UUID | None:
    """Parse a reference token, None if malformed."""
    if not is_valid_reference_token(value):
        return None
    return value if isinstance(value, UUID) else UUID(value)
