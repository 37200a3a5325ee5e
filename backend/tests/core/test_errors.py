"""Tests for map_exception — pure exception → status/category mapping."""

import pytest

from app.core.errors import (
    DuplicateEmailError,
    ErrorCategory,
    INTERNAL_ERROR,
    InvalidArgumentError,
    InvalidOperationError,
    UnauthorizedError,
    map_exception,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "error"),
    [
        (InvalidArgumentError("bad id"), 400, "Invalid request parameters"),
        (ValueError("bad value"), 400, "Invalid request parameters"),
        (InvalidOperationError("not allowed"), 400, "Invalid operation"),
        (DuplicateEmailError("ann@x.com"), 409, "Duplicate email"),
        (UnauthorizedError(), 401, "Unauthorized access"),
        (PermissionError("nope"), 401, "Unauthorized access"),
        (NotImplementedError(), 501, "Feature not implemented"),
        (TimeoutError(), 408, "Request timeout"),
        (RuntimeError("boom"), 500, "Internal server error"),
        (KeyError("missing"), 500, "Internal server error"),
    ],
)
def test_maps_exception_kind_to_status(exc, status_code, error):
    mapping = map_exception(exc)
    assert mapping.status_code == status_code
    assert mapping.error == error


def test_same_kind_always_maps_the_same():
    first = map_exception(NotImplementedError("from list"))
    second = map_exception(NotImplementedError("from delete"))
    assert first == second


def test_duplicate_email_wins_over_invalid_operation_base():
    mapping = map_exception(DuplicateEmailError("a@b.com"))
    assert mapping.category == ErrorCategory.DUPLICATE_EMAIL
    assert mapping.message == "A user with email 'a@b.com' already exists."


def test_argument_errors_surface_exception_message():
    assert map_exception(ValueError("id must be positive")).message == "id must be positive"


def test_empty_argument_message_falls_back_to_type_name():
    assert map_exception(ValueError()).message == "ValueError"


def test_internal_errors_never_leak_exception_text():
    mapping = map_exception(RuntimeError("password=hunter2"))
    assert mapping is INTERNAL_ERROR
    assert "hunter2" not in mapping.message
    assert mapping.is_internal


def test_unauthorized_uses_fixed_message():
    mapping = map_exception(UnauthorizedError("token abc123 expired"))
    assert "abc123" not in mapping.message


def test_registry_errors_map_by_type_alone():
    class FrozenRegistryError(InvalidOperationError):
        pass

    mapping = map_exception(FrozenRegistryError("registry is read-only"))
    assert mapping.status_code == 400
    assert mapping.category == ErrorCategory.INVALID_OPERATION
    assert mapping.message == "registry is read-only"


def test_registry_errors_carry_no_status_override():
    with pytest.raises(TypeError):
        InvalidOperationError("conflict", http_status=409)
