from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ideahub.api.handlers.deps import ApiDeps
from ideahub.clients.identity import BearerTokenVerifier
from ideahub.domain.contracts import IdeaRepository, IdentityVerifier
from ideahub.repositories.postgres import AsyncpgPoolManager, PostgresIdeaRepository
from ideahub.repositories.stub import InMemoryIdeaRepository
from ideahub.settings import AppSettings


@dataclass
class RuntimeContainer:
    repository: IdeaRepository
    identity_verifier: IdentityVerifier
    api_deps: ApiDeps
    on_startup: Callable[[], Awaitable[None]] | None
    on_shutdown: Callable[[], Awaitable[None]] | None


def build_runtime_container(settings: AppSettings) -> RuntimeContainer:
    on_startup: Callable[[], Awaitable[None]] | None = None
    on_shutdown: Callable[[], Awaitable[None]] | None = None
    repository: IdeaRepository
    if settings.database_url:
        pool_manager = AsyncpgPoolManager(dsn=settings.database_url)
        repository = PostgresIdeaRepository(pool_manager=pool_manager)
        on_startup = pool_manager.startup
        on_shutdown = pool_manager.shutdown
        repository_kind = "postgres"
    else:
        repository = InMemoryIdeaRepository()
        repository_kind = "memory"

    identity_verifier = BearerTokenVerifier(secret=settings.jwt_secret)
    api_deps = ApiDeps(
        repository=repository,
        identity_verifier=identity_verifier,
        repository_kind=repository_kind,
    )

    return RuntimeContainer(
        repository=repository,
        identity_verifier=identity_verifier,
        api_deps=api_deps,
        on_startup=on_startup,
        on_shutdown=on_shutdown,
    )
