from __future__ import annotations

import logging

from ideahub.domain.contracts import IdeaRepository
from ideahub.domain.dto import CreateIdeaCommand, ListIdeasCommand, UpdateIdeaCommand
from ideahub.domain.errors import DomainValidationError, InvalidStateError, NotFoundError, OwnershipError
from ideahub.domain.lifecycle import is_editable, status_after_owner_edit
from ideahub.domain.models import (
    IdeaListQuery,
    IdeaPage,
    IdeaSnapshot,
    IdeaStatus,
    Pagination,
    RequestContext,
)
from ideahub.domain.use_cases.queue import clamp_limit
from ideahub.roles import Role

COMPONENT_ID_CREATE = "domain.ideas.create"
COMPONENT_ID_UPDATE = "domain.ideas.update"
COMPONENT_ID_DELETE = "domain.ideas.delete"

LISTING_DEFAULT_LIMIT = 10

REVIEWER_ROLES = frozenset({Role.EVALUATOR, Role.ADMIN})

logger = logging.getLogger("ideahub.ideas")


async def create_idea(repository: IdeaRepository, ctx: RequestContext, cmd: CreateIdeaCommand) -> IdeaSnapshot:
    status = IdeaStatus.DRAFT if cmd.draft else IdeaStatus.SUBMITTED
    idea = await repository.create_idea(
        owner_id=ctx.subject_id,
        title=cmd.title,
        description=cmd.description,
        category=cmd.category,
        status=status.value,
        submitter_name=cmd.submitter_name,
        submitter_email=ctx.email,
    )
    logger.info(
        "idea created",
        extra={"component": COMPONENT_ID_CREATE, "idea_id": idea.id, "subject_id": ctx.subject_id},
    )
    return idea


async def list_ideas(
    repository: IdeaRepository,
    cmd: ListIdeasCommand,
    *,
    owner_id: str | None,
) -> IdeaPage:
    """Listing view; owner_id=None lists across all owners."""
    if cmd.offset < 0:
        raise DomainValidationError("offset must be zero or greater", field="offset")
    limit = clamp_limit(cmd.limit)
    query = IdeaListQuery(
        statuses=cmd.statuses,
        owner_id=owner_id,
        sort_by=cmd.sort_by,
        sort_order=cmd.sort_order,
        limit=limit,
        offset=cmd.offset,
    )
    items = await repository.list_ideas(query=query)
    total = await repository.count_ideas(query=query)
    return IdeaPage(items=items, pagination=Pagination(total=total, limit=limit, offset=cmd.offset))


async def get_idea(repository: IdeaRepository, ctx: RequestContext, *, idea_id: str) -> IdeaSnapshot:
    idea = await _require_idea(repository, idea_id)
    if idea.owner_id != ctx.subject_id and ctx.role not in REVIEWER_ROLES:
        raise OwnershipError("Unauthorized: You do not own this idea")
    return idea


async def update_idea(repository: IdeaRepository, ctx: RequestContext, cmd: UpdateIdeaCommand) -> IdeaSnapshot:
    idea = await _require_owned_editable(repository, ctx, cmd.idea_id)
    updated = await repository.update_idea(
        idea_id=idea.id,
        title=cmd.title,
        description=cmd.description,
        category=cmd.category,
        status=status_after_owner_edit(idea.status).value,
    )
    if updated is None:
        raise NotFoundError("Idea not found")
    logger.info(
        "idea updated",
        extra={"component": COMPONENT_ID_UPDATE, "idea_id": idea.id, "subject_id": ctx.subject_id},
    )
    return updated


async def delete_idea(repository: IdeaRepository, ctx: RequestContext, *, idea_id: str) -> None:
    idea = await _require_owned_editable(repository, ctx, idea_id)
    if not await repository.delete_idea(idea_id=idea.id):
        raise NotFoundError("Idea not found")
    logger.info(
        "idea deleted",
        extra={"component": COMPONENT_ID_DELETE, "idea_id": idea.id, "subject_id": ctx.subject_id},
    )


async def _require_idea(repository: IdeaRepository, idea_id: str) -> IdeaSnapshot:
    idea = await repository.get_idea(idea_id=idea_id)
    if idea is None:
        raise NotFoundError("Idea not found")
    return idea


async def _require_owned_editable(repository: IdeaRepository, ctx: RequestContext, idea_id: str) -> IdeaSnapshot:
    idea = await _require_idea(repository, idea_id)
    if idea.owner_id != ctx.subject_id:
        raise OwnershipError("Unauthorized: You do not own this idea")
    if not is_editable(idea.status):
        raise InvalidStateError(f"Idea in status {idea.status} can no longer be changed")
    return idea
