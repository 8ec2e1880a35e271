"""Reference parsing for handler inputs (path ids and body ids).

Invariants:
    - Path ids: malformed -> InvalidReferenceError (422), checked before any store call
    - Body ids and delete-page ids: malformed -> None, the caller redirects
"""

from uuid import UUID

from locallibrary.core.domain_types import parse_reference_token
from locallibrary.core.errors import ErrorContext, InvalidReferenceError


def require_reference(raw_id: str, entity: str) -> UUID:
    """Parse a path identifier or raise InvalidReferenceError."""
    record_id = parse_reference_token(raw_id)
    if record_id is None:
        raise InvalidReferenceError(
            raw_id, ErrorContext(entity=entity, record_id=raw_id),
        )
    return record_id


def optional_reference(raw_id: object) -> UUID | None:
    """Parse a loosely supplied identifier, None if missing or malformed."""
    if isinstance(raw_id, (list, tuple)):
        raw_id = raw_id[0] if raw_id else None
    if not isinstance(raw_id, str):
        return None
    return parse_reference_token(raw_id.strip())
