from __future__ import annotations

import logging

from ideahub.domain.contracts import MAX_BATCH_SIZE, IdeaRepository
from ideahub.domain.dto import (
    BulkAssignCommand,
    BulkAssignResult,
    BulkStatusUpdateCommand,
    BulkStatusUpdateResult,
)
from ideahub.domain.errors import DomainValidationError
from ideahub.domain.lifecycle import BULK_TARGET_STATUSES

COMPONENT_ID_STATUS = "domain.bulk.status_update"
COMPONENT_ID_ASSIGN = "domain.bulk.assign"

logger = logging.getLogger("ideahub.bulk")


def validate_item_ids(item_ids: object) -> tuple[str, ...]:
    """Check batch shape and return the ids de-duplicated in input order.

    The bound applies to the list as sent, so an oversized request is rejected
    as a whole even when it contains duplicates.
    """
    if not isinstance(item_ids, list) or not item_ids:
        raise DomainValidationError("Invalid item_ids. Must be a non-empty array", field="item_ids")
    if len(item_ids) > MAX_BATCH_SIZE:
        raise DomainValidationError(
            f"Bulk operations limited to {MAX_BATCH_SIZE} items maximum",
            field="item_ids",
        )
    if not all(isinstance(item_id, str) and item_id for item_id in item_ids):
        raise DomainValidationError("Invalid item_ids. Every id must be a non-empty string", field="item_ids")
    return tuple(dict.fromkeys(item_ids))


async def bulk_status_update(repository: IdeaRepository, cmd: BulkStatusUpdateCommand) -> BulkStatusUpdateResult:
    idea_ids = validate_item_ids(cmd.item_ids)
    if cmd.status not in BULK_TARGET_STATUSES:
        allowed = ", ".join(BULK_TARGET_STATUSES)
        raise DomainValidationError(f"Invalid status. Must be one of: {allowed}", field="status")

    updated = await repository.bulk_update_status(idea_ids=idea_ids, status=str(cmd.status))
    logger.info(
        "bulk status update applied",
        extra={
            "component": COMPONENT_ID_STATUS,
            "subject_id": cmd.actor_id,
            "status": cmd.status,
            "count": updated,
        },
    )
    return BulkStatusUpdateResult(updated=updated, requested=len(idea_ids))


async def bulk_assign(repository: IdeaRepository, cmd: BulkAssignCommand) -> BulkAssignResult:
    idea_ids = validate_item_ids(cmd.item_ids)
    if not cmd.assignee_id:
        raise DomainValidationError("Missing required field: assignee_id", field="assignee_id")

    assigned = await repository.bulk_assign(idea_ids=idea_ids, assignee_id=cmd.assignee_id)
    logger.info(
        "bulk assign applied",
        extra={
            "component": COMPONENT_ID_ASSIGN,
            "subject_id": cmd.actor_id,
            "assignee_id": cmd.assignee_id,
            "count": assigned,
        },
    )
    return BulkAssignResult(assigned=assigned, requested=len(idea_ids))
