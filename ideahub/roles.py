from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    SUBMITTER = "submitter"
    EVALUATOR = "evaluator"
    ADMIN = "admin"


SUPPORTED_ROLES: tuple[Role, ...] = (Role.SUBMITTER, Role.EVALUATOR, Role.ADMIN)

# Placeholder for claims-based RBAC: role is derived from email text only.
# Rule order is significant, the first match wins.
_ROLE_MARKERS: tuple[tuple[Role, tuple[str, ...]], ...] = (
    (Role.ADMIN, ("admin",)),
    (Role.EVALUATOR, ("evaluator", "eval")),
)


def resolve_role(email: str | None) -> Role:
    if not email:
        return Role.SUBMITTER

    lowered = email.lower()
    for role, markers in _ROLE_MARKERS:
        if any(marker in lowered for marker in markers):
            return role
    return Role.SUBMITTER


def validate_role(role: str) -> Role:
    if role in SUPPORTED_ROLES:
        return Role(role)

    supported = ", ".join(SUPPORTED_ROLES)
    raise ValueError(f"Unsupported role '{role}'. Supported roles: {supported}.")
