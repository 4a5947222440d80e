"""Error hierarchy — HTTP status, codes and the response envelope."""

from argan_hr.core.errors import (
    BusinessRuleError, ConflictError, DatabaseError, EmailAlreadyExistsError,
    InvalidCredentialsError, RateLimitExceededError, ResourceNotFoundError,
    ValidationError,
)


def test_status_codes():
    assert ValidationError("x").http_status == 400
    assert InvalidCredentialsError().http_status == 401
    assert ResourceNotFoundError("Client", 7).http_status == 404
    assert ConflictError("x").http_status == 409
    assert EmailAlreadyExistsError("a@b.co").code == "EMAIL_ALREADY_EXISTS"
    assert BusinessRuleError("x").http_status == 422
    assert RateLimitExceededError(30).http_status == 429
    assert DatabaseError("x", "query").http_status == 503


def test_envelope_shape():
    body = ResourceNotFoundError("Client", 7).to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert "timestamp" in body
    assert "Client" in body["message"]


def test_rate_limit_envelope_carries_retry_after():
    body = RateLimitExceededError(42).to_response()["error"]
    assert body["code"] == "RATE_LIMITED"
    assert body["retry_after_seconds"] == 42


def test_validation_error_with_field_has_details():
    body = ValidationError("Bad page", field="page").to_response()["error"]
    assert body["details"] == [{"field": "page", "message": "Bad page"}]
