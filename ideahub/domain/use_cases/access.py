from __future__ import annotations

from collections.abc import Callable, Iterable
import logging

from ideahub.domain.errors import DomainInvariantError, PermissionDeniedError
from ideahub.domain.models import Identity, RequestContext
from ideahub.roles import Role, resolve_role

COMPONENT_ID = "domain.access.authorize"

RoleResolver = Callable[[str | None], Role]

logger = logging.getLogger("ideahub.access")


def authorize(
    identity: Identity,
    allowed_roles: Iterable[Role],
    *,
    resolver: RoleResolver = resolve_role,
) -> RequestContext:
    """Derive the caller role and admit it only if it is in allowed_roles.

    The role is recomputed from the verified identity on every call; nothing
    supplied by the client is trusted. A failure inside the resolver is a
    server fault, not a denial.
    """
    allowed = tuple(allowed_roles)
    try:
        role = resolver(identity.email)
    except Exception as exc:
        logger.exception(
            "role resolution failed",
            extra={"component": COMPONENT_ID, "subject_id": identity.subject_id},
        )
        raise DomainInvariantError("role validation failed") from exc

    if role not in allowed:
        logger.warning(
            "access denied",
            extra={
                "component": COMPONENT_ID,
                "subject_id": identity.subject_id,
                "role": role.value,
                "required_roles": [item.value for item in allowed],
            },
        )
        raise PermissionDeniedError(
            attempted_role=role.value,
            required_roles=[item.value for item in allowed],
        )

    return RequestContext(subject_id=identity.subject_id, email=identity.email, role=role)
