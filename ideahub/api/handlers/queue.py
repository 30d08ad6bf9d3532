from __future__ import annotations

from ideahub.api.handlers.deps import ApiDeps
from ideahub.api.schemas import PaginationResponse, QueueItemResponse, QueueResponse
from ideahub.domain.dto import GetQueueCommand
from ideahub.domain.use_cases.queue import get_queue


async def get_queue_handler(deps: ApiDeps, *, limit: int, offset: int) -> QueueResponse:
    page = await get_queue(deps.repository, GetQueueCommand(limit=limit, offset=offset))
    return QueueResponse(
        items=[
            QueueItemResponse(
                id=item.id,
                title=item.title,
                category=item.category,
                status=item.status,
                submitter_name=item.submitter_name,
                assignee_id=item.assignee_id,
                created_at=item.created_at,
                days_in_queue=item.days_in_queue,
            )
            for item in page.items
        ],
        pagination=PaginationResponse(
            total=page.pagination.total,
            limit=page.pagination.limit,
            offset=page.pagination.offset,
        ),
    )
