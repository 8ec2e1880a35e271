"""Domain Types: verifies identity types, status enum and reference tokens."""

from uuid import UUID, uuid4

from locallibrary.core.domain_types import (
    AuthorId, BookId, BookInstanceId, GenreId,
    BookInstanceStatus, DEFAULT_INSTANCE_STATUS,
    is_valid_reference_token, parse_reference_token,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert AuthorId(uid) == uid
    assert GenreId(uid) == uid
    assert BookId(uid) == uid
    assert BookInstanceId(uid) == uid


def test_status_has_four_values():
    assert [s.value for s in BookInstanceStatus] == [
        "Available", "Maintenance", "Loaned", "Reserved",
    ]


def test_default_status_is_maintenance():
    assert DEFAULT_INSTANCE_STATUS == "Maintenance"


def test_reference_token_accepts_uuid_forms():
    uid = uuid4()
    assert is_valid_reference_token(str(uid))
    assert is_valid_reference_token(uid)


def test_reference_token_rejects_malformed():
    assert not is_valid_reference_token("")
    assert not is_valid_reference_token("abc")
    assert not is_valid_reference_token(None)
    assert not is_valid_reference_token(42)


def test_parse_reference_token():
    uid = uuid4()
    assert parse_reference_token(str(uid)) == uid
    assert isinstance(parse_reference_token(str(uid)), UUID)
    assert parse_reference_token("nope") is None
