from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Header

from ideahub.clients.identity import parse_bearer_header
from ideahub.domain.contracts import IdentityVerifier
from ideahub.domain.models import RequestContext
from ideahub.domain.use_cases.access import RoleResolver, authorize
from ideahub.roles import SUPPORTED_ROLES, Role, resolve_role

ContextDependency = Callable[..., Awaitable[RequestContext]]


@dataclass(frozen=True)
class AccessGate:
    """Builds FastAPI dependencies that authenticate, then check the role.

    A dependency that raises stops the request before the route body runs,
    so a denied caller never reaches the handler.
    """

    verifier: IdentityVerifier
    resolver: RoleResolver = resolve_role

    def require(self, *roles: Role) -> ContextDependency:
        allowed = roles or SUPPORTED_ROLES

        async def dependency(
            authorization: Annotated[str | None, Header()] = None,
        ) -> RequestContext:
            identity = self.verifier.verify(parse_bearer_header(authorization))
            return authorize(identity, allowed, resolver=self.resolver)

        return dependency

    def require_authenticated(self) -> ContextDependency:
        return self.require(*SUPPORTED_ROLES)

    def require_evaluator(self) -> ContextDependency:
        return self.require(Role.EVALUATOR, Role.ADMIN)
