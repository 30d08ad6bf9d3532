from __future__ import annotations

from datetime import UTC, datetime, timedelta

from ideahub.domain.contracts import MAX_BATCH_SIZE, IdeaRepository
from ideahub.domain.dto import GetQueueCommand
from ideahub.domain.errors import DomainValidationError
from ideahub.domain.lifecycle import QUEUE_STATUSES
from ideahub.domain.models import (
    IdeaListQuery,
    IdeaSnapshot,
    IdeaSortBy,
    Pagination,
    QueueItem,
    QueuePage,
    SortOrder,
)

COMPONENT_ID = "domain.queue.get"

QUEUE_DEFAULT_LIMIT = 25


async def get_queue(repository: IdeaRepository, cmd: GetQueueCommand) -> QueuePage:
    """Open ideas, oldest first, so nothing waits behind newer work."""
    if cmd.offset < 0:
        raise DomainValidationError("offset must be zero or greater", field="offset")
    limit = clamp_limit(cmd.limit)
    now = cmd.now or datetime.now(tz=UTC)

    query = IdeaListQuery(
        statuses=QUEUE_STATUSES,
        sort_by=IdeaSortBy.CREATED_AT,
        sort_order=SortOrder.ASC,
        limit=limit,
        offset=cmd.offset,
    )
    ideas = await repository.list_ideas(query=query)
    total = await repository.count_ideas(query=query)

    return QueuePage(
        items=[_to_queue_item(idea, now=now) for idea in ideas],
        pagination=Pagination(total=total, limit=limit, offset=cmd.offset),
    )


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_BATCH_SIZE))


def days_in_queue(created_at: datetime, *, now: datetime) -> int:
    return max(0, (now - created_at) // timedelta(days=1))


def _to_queue_item(idea: IdeaSnapshot, *, now: datetime) -> QueueItem:
    return QueueItem(
        id=idea.id,
        title=idea.title,
        category=idea.category,
        status=idea.status,
        submitter_name=idea.submitter_name or "Unknown",
        assignee_id=idea.assignee_id,
        created_at=idea.created_at,
        days_in_queue=days_in_queue(idea.created_at, now=now),
    )
