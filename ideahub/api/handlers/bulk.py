from __future__ import annotations

from ideahub.api.handlers.deps import ApiDeps
from ideahub.api.schemas import BulkAssignResponse, BulkStatusUpdateResponse
from ideahub.domain.dto import BulkAssignCommand, BulkStatusUpdateCommand
from ideahub.domain.models import RequestContext
from ideahub.domain.use_cases.bulk import bulk_assign, bulk_status_update


async def bulk_status_update_handler(
    deps: ApiDeps,
    ctx: RequestContext,
    *,
    item_ids: list[str] | None,
    status: str | None,
) -> BulkStatusUpdateResponse:
    result = await bulk_status_update(
        deps.repository,
        BulkStatusUpdateCommand(item_ids=item_ids, status=status, actor_id=ctx.subject_id),
    )
    return BulkStatusUpdateResponse(updated=result.updated, requested=result.requested)


async def bulk_assign_handler(
    deps: ApiDeps,
    ctx: RequestContext,
    *,
    item_ids: list[str] | None,
    assignee_id: str | None,
) -> BulkAssignResponse:
    result = await bulk_assign(
        deps.repository,
        BulkAssignCommand(item_ids=item_ids, assignee_id=assignee_id, actor_id=ctx.subject_id),
    )
    return BulkAssignResponse(assigned=result.assigned, requested=result.requested)
