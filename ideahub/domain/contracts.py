from __future__ import annotations

from typing import Protocol, runtime_checkable

from ideahub.domain.models import (
    EvaluationRecord,
    IdeaListQuery,
    IdeaSnapshot,
    Identity,
)

# Upper bound shared by bulk writes and exports.
MAX_BATCH_SIZE = 100


@runtime_checkable
class IdeaRepository(Protocol):
    """Persistence contract for ideas and their evaluation audit trail.

    Batch methods never fail for ids that do not exist: unknown ids are
    skipped and excluded from the returned count. A batch write is applied
    to the existing subset in a single transaction.
    """

    async def create_idea(
        self,
        *,
        owner_id: str,
        title: str,
        description: str,
        category: str,
        status: str,
        submitter_name: str | None = None,
        submitter_email: str | None = None,
    ) -> IdeaSnapshot: ...

    async def get_idea(self, *, idea_id: str) -> IdeaSnapshot | None: ...

    async def get_ideas_by_ids(self, *, idea_ids: tuple[str, ...]) -> list[IdeaSnapshot]: ...

    async def list_ideas(self, *, query: IdeaListQuery) -> list[IdeaSnapshot]: ...

    async def count_ideas(self, *, query: IdeaListQuery) -> int: ...

    async def update_idea(
        self,
        *,
        idea_id: str,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> IdeaSnapshot | None: ...

    async def delete_idea(self, *, idea_id: str) -> bool: ...

    # Appends an immutable record and moves the idea to the decided status
    # in the same write.
    async def append_evaluation(
        self,
        *,
        idea_id: str,
        evaluator_id: str,
        status: str,
        comments: str,
        file_url: str | None = None,
    ) -> EvaluationRecord: ...

    # Newest first.
    async def list_evaluations(self, *, idea_id: str) -> list[EvaluationRecord]: ...

    async def bulk_update_status(self, *, idea_ids: tuple[str, ...], status: str) -> int: ...

    async def bulk_assign(self, *, idea_ids: tuple[str, ...], assignee_id: str) -> int: ...


@runtime_checkable
class IdentityVerifier(Protocol):
    """Turns a bearer credential into a verified identity.

    Raises AuthenticationError for missing, malformed or rejected credentials.
    """

    def verify(self, token: str) -> Identity: ...
