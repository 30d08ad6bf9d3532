import pytest

from ideahub.domain.error_taxonomy import (
    CANONICAL_ERROR_CODES,
    classify_error,
    http_status_for,
    is_canonical_error_code,
)
from ideahub.domain.errors import (
    AuthenticationError,
    DomainInvariantError,
    DomainValidationError,
    InvalidStateError,
    NotFoundError,
    OwnershipError,
    PermissionDeniedError,
)


@pytest.mark.unit
def test_canonical_error_codes_are_enforced() -> None:
    assert is_canonical_error_code("not_owner") is True
    assert is_canonical_error_code("teapot") is False


@pytest.mark.unit
def test_unknown_codes_map_to_server_error() -> None:
    assert http_status_for("teapot") == 500
    assert classify_error("teapot") == "server"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status"),
    [
        (AuthenticationError("no token"), 401),
        (PermissionDeniedError(attempted_role="submitter", required_roles=["admin"]), 403),
        (OwnershipError("not yours"), 403),
        (DomainValidationError("bad", field="title"), 400),
        (NotFoundError("missing"), 404),
        (InvalidStateError("locked"), 409),
        (DomainInvariantError("broken"), 500),
    ],
)
def test_domain_errors_carry_http_status(error: Exception, status: int) -> None:
    code = getattr(error, "code")
    assert code in CANONICAL_ERROR_CODES
    assert http_status_for(code) == status


@pytest.mark.unit
def test_permission_denied_keeps_role_details() -> None:
    error = PermissionDeniedError(attempted_role="evaluator", required_roles=["admin"])

    assert error.attempted_role == "evaluator"
    assert error.required_roles == ("admin",)
    assert str(error) == "Insufficient permissions for this action"
    assert classify_error(error.code) == "client"
