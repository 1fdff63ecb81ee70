"""Unit tests for registry errors and results."""

import pytest

from threat_registry.core.errors import (
    ErrorCode,
    RegistryError,
    RegistryOperationError,
    Result,
    authorization_error,
    conflict_error,
    not_found_error,
    validation_error,
)


def test_error_codes():
    """Test the numeric codes of the error taxonomy."""
    assert validation_error().code == 400
    assert authorization_error().code == 403
    assert not_found_error().code == 404
    assert conflict_error().code == 409


def test_error_kinds():
    """Test each code maps to its error kind."""
    assert validation_error().kind == 'ValidationError'
    assert authorization_error().kind == 'AuthorizationError'
    assert not_found_error().kind == 'NotFoundError'
    assert conflict_error().kind == 'ConflictError'


def test_error_str():
    """Test error rendering with and without a message."""
    assert str(conflict_error("threat #1 is already validated")) == \
        "ConflictError (409): threat #1 is already validated"
    assert str(RegistryError(ErrorCode.NOT_FOUND)) == "NotFoundError (404)"


def test_success_result():
    """Test a successful result exposes its value."""
    result = Result.success(7)

    assert result.is_ok
    assert result.code is None
    assert result.unwrap() == 7
    assert result.to_dict() == {'value': 7}


def test_failure_result():
    """Test a failed result exposes its error code."""
    result = Result.failure(not_found_error("missing"))

    assert not result.is_ok
    assert result.code == ErrorCode.NOT_FOUND
    assert result.to_dict() == {'error': 404}


def test_unwrap_failure_raises():
    """Test unwrapping a failure raises with the original error attached."""
    error = authorization_error("not the admin")

    with pytest.raises(RegistryOperationError) as exc_info:
        Result.failure(error).unwrap()

    assert exc_info.value.error is error
    assert exc_info.value.code == ErrorCode.UNAUTHORIZED
