from __future__ import annotations

from collections.abc import Iterable

from ideahub.domain.error_taxonomy import ErrorCode


class DomainError(Exception):
    code: ErrorCode = "internal_error"


class AuthenticationError(DomainError):
    code: ErrorCode = "authentication_failed"


class PermissionDeniedError(DomainError):
    code: ErrorCode = "insufficient_permissions"

    def __init__(self, *, attempted_role: str, required_roles: Iterable[str]) -> None:
        self.attempted_role = attempted_role
        self.required_roles = tuple(required_roles)
        super().__init__("Insufficient permissions for this action")


class OwnershipError(DomainError):
    code: ErrorCode = "not_owner"


class DomainValidationError(DomainError):
    code: ErrorCode = "validation_error"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class NotFoundError(DomainError):
    code: ErrorCode = "not_found"


class InvalidStateError(DomainError):
    code: ErrorCode = "invalid_state"


class DomainInvariantError(DomainError):
    pass
