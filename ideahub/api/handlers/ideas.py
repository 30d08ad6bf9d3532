from __future__ import annotations

from ideahub.api.handlers.deps import ApiDeps
from ideahub.api.schemas import DeleteIdeaResponse, IdeaListResponse, IdeaResponse, PaginationResponse
from ideahub.domain.dto import CreateIdeaCommand, ListIdeasCommand, UpdateIdeaCommand
from ideahub.domain.models import IdeaPage, IdeaSnapshot, IdeaSortBy, IdeaStatus, RequestContext, SortOrder
from ideahub.domain.use_cases.ideas import create_idea, delete_idea, get_idea, list_ideas, update_idea


async def create_idea_handler(
    deps: ApiDeps,
    ctx: RequestContext,
    *,
    title: str,
    description: str,
    category: str,
    draft: bool,
    submitter_name: str | None,
) -> IdeaResponse:
    idea = await create_idea(
        deps.repository,
        ctx,
        CreateIdeaCommand(
            title=title,
            description=description,
            category=category,
            draft=draft,
            submitter_name=submitter_name,
        ),
    )
    return to_idea_response(idea)


async def list_ideas_handler(
    deps: ApiDeps,
    *,
    owner_id: str | None,
    statuses: tuple[IdeaStatus, ...] | None,
    sort_by: IdeaSortBy,
    sort_order: SortOrder,
    limit: int,
    offset: int,
) -> IdeaListResponse:
    """List one owner's ideas, or every idea when owner_id is None."""
    page = await list_ideas(
        deps.repository,
        ListIdeasCommand(
            statuses=statuses,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        ),
        owner_id=owner_id,
    )
    return to_idea_list_response(page)


async def get_idea_handler(deps: ApiDeps, ctx: RequestContext, *, idea_id: str) -> IdeaResponse:
    return to_idea_response(await get_idea(deps.repository, ctx, idea_id=idea_id))


async def update_idea_handler(
    deps: ApiDeps,
    ctx: RequestContext,
    *,
    idea_id: str,
    title: str | None,
    description: str | None,
    category: str | None,
) -> IdeaResponse:
    idea = await update_idea(
        deps.repository,
        ctx,
        UpdateIdeaCommand(idea_id=idea_id, title=title, description=description, category=category),
    )
    return to_idea_response(idea)


async def delete_idea_handler(deps: ApiDeps, ctx: RequestContext, *, idea_id: str) -> DeleteIdeaResponse:
    await delete_idea(deps.repository, ctx, idea_id=idea_id)
    return DeleteIdeaResponse(id=idea_id, deleted=True)


def to_idea_response(idea: IdeaSnapshot) -> IdeaResponse:
    return IdeaResponse(
        id=idea.id,
        title=idea.title,
        description=idea.description,
        category=idea.category,
        status=idea.status,
        owner_id=idea.owner_id,
        submitter_name=idea.submitter_name,
        submitter_email=idea.submitter_email,
        assignee_id=idea.assignee_id,
        created_at=idea.created_at,
        updated_at=idea.updated_at,
    )


def to_idea_list_response(page: IdeaPage) -> IdeaListResponse:
    return IdeaListResponse(
        items=[to_idea_response(item) for item in page.items],
        pagination=PaginationResponse(
            total=page.pagination.total,
            limit=page.pagination.limit,
            offset=page.pagination.offset,
        ),
    )
