"""Error Hierarchy: verifies status codes, messages and the error-page payload."""

from locallibrary.core.errors import (
    CatalogError, DatabaseError, ErrorCategory, ErrorContext,
    InvalidReferenceError, ResourceNotFoundError,
)


def test_invalid_reference_is_422():
    err = InvalidReferenceError("abc", ErrorContext(entity="author"))
    assert err.http_status == 422
    assert err.message == "Invalid ID"
    assert err.raw_id == "abc"
    assert err.category == ErrorCategory.VALIDATION


def test_resource_not_found_is_404_with_type_in_message():
    err = ResourceNotFoundError("Book copy", "some-id")
    assert err.http_status == 404
    assert err.message == "Book copy not found"
    assert err.context.record_id == "some-id"


def test_database_error_is_503():
    err = DatabaseError("Integrity constraint violated", "commit")
    assert err.http_status == 503
    assert err.operation == "commit"
    assert isinstance(err, CatalogError)


def test_to_response_shape():
    err = ResourceNotFoundError("Author", "x", ErrorContext(entity="author"))
    payload = err.to_response()["error"]
    assert payload["code"] == "RESOURCE_NOT_FOUND"
    assert payload["status"] == 404
    assert payload["category"] == "resource_not_found"
    assert payload["context"] == {"entity": "author", "record_id": "x"}
    assert "timestamp" in payload
