from __future__ import annotations

from dataclasses import dataclass

from ideahub.domain.contracts import IdeaRepository, IdentityVerifier


@dataclass(frozen=True)
class ApiDeps:
    repository: IdeaRepository
    identity_verifier: IdentityVerifier
    repository_kind: str = "memory"
