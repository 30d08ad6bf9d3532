from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

# Canonical error vocabulary exposed in API error bodies.
ErrorCode = Literal[
    "authentication_failed",
    "insufficient_permissions",
    "not_owner",
    "validation_error",
    "not_found",
    "invalid_state",
    "internal_error",
]

ErrorClass = Literal["client", "server"]

CANONICAL_ERROR_CODES: tuple[ErrorCode, ...] = (
    "authentication_failed",
    "insufficient_permissions",
    "not_owner",
    "validation_error",
    "not_found",
    "invalid_state",
    "internal_error",
)

HTTP_STATUS_BY_CODE: Mapping[ErrorCode, int] = {
    "authentication_failed": 401,
    "insufficient_permissions": 403,
    "not_owner": 403,
    "validation_error": 400,
    "not_found": 404,
    "invalid_state": 409,
    "internal_error": 500,
}


def is_canonical_error_code(code: str) -> bool:
    return code in CANONICAL_ERROR_CODES


def http_status_for(code: str) -> int:
    if not is_canonical_error_code(code):
        # Unknown codes never leak as client errors.
        return HTTP_STATUS_BY_CODE["internal_error"]
    return HTTP_STATUS_BY_CODE[code]  # type: ignore[index]


def classify_error(code: str) -> ErrorClass:
    if http_status_for(code) >= 500:
        return "server"
    return "client"
