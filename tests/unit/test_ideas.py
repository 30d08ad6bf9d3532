import asyncio

import pytest

from ideahub.domain.dto import CreateIdeaCommand, ListIdeasCommand, UpdateIdeaCommand
from ideahub.domain.errors import InvalidStateError, NotFoundError, OwnershipError
from ideahub.domain.lifecycle import is_editable, status_after_owner_edit
from ideahub.domain.models import IdeaSortBy, IdeaStatus, SortOrder
from ideahub.domain.use_cases.ideas import create_idea, delete_idea, get_idea, list_ideas, update_idea
from ideahub.repositories.stub import InMemoryIdeaRepository
from ideahub.roles import Role
from tests.unit.idea_seed import context, seed_idea


@pytest.mark.unit
@pytest.mark.parametrize(("draft", "status"), [(False, IdeaStatus.SUBMITTED), (True, IdeaStatus.DRAFT)])
def test_create_sets_initial_status(draft: bool, status: IdeaStatus) -> None:
    repository = InMemoryIdeaRepository()

    idea = asyncio.run(
        create_idea(
            repository,
            context(),
            CreateIdeaCommand(title="Better onboarding", description="Pair new hires with mentors", category="PROCESS", draft=draft),
        )
    )

    assert idea.id.startswith("idea_")
    assert idea.status == status
    assert idea.owner_id == "user-owner"
    assert idea.submitter_email == "user-owner@company.test"


@pytest.mark.unit
def test_owner_listing_only_returns_own_ideas() -> None:
    repository = InMemoryIdeaRepository()
    mine = seed_idea(repository, owner_id="user-owner")
    seed_idea(repository, owner_id="someone-else")

    page = asyncio.run(list_ideas(repository, ListIdeasCommand(), owner_id="user-owner"))

    assert [item.id for item in page.items] == [mine]
    assert page.pagination.total == 1


@pytest.mark.unit
def test_listing_filters_and_sorts() -> None:
    repository = InMemoryIdeaRepository()
    seed_idea(repository, title="banana", status=IdeaStatus.ACCEPTED)
    seed_idea(repository, title="Apple", status=IdeaStatus.ACCEPTED)
    seed_idea(repository, title="Cherry", status=IdeaStatus.DRAFT)

    page = asyncio.run(
        list_ideas(
            repository,
            ListIdeasCommand(statuses=(IdeaStatus.ACCEPTED,), sort_by=IdeaSortBy.TITLE, sort_order=SortOrder.ASC),
            owner_id=None,
        )
    )

    assert [item.title for item in page.items] == ["Apple", "banana"]


@pytest.mark.unit
def test_reviewers_may_read_any_idea_but_other_submitters_may_not() -> None:
    repository = InMemoryIdeaRepository()
    idea_id = seed_idea(repository)

    assert asyncio.run(get_idea(repository, context("evaluator-1", Role.EVALUATOR), idea_id=idea_id)).id == idea_id
    with pytest.raises(OwnershipError):
        asyncio.run(get_idea(repository, context("stranger"), idea_id=idea_id))
    with pytest.raises(NotFoundError):
        asyncio.run(get_idea(repository, context(), idea_id="idea_missing"))


@pytest.mark.unit
def test_editing_revision_request_resubmits_idea() -> None:
    repository = InMemoryIdeaRepository()
    idea_id = seed_idea(repository, status=IdeaStatus.NEEDS_REVISION)

    updated = asyncio.run(
        update_idea(repository, context(), UpdateIdeaCommand(idea_id=idea_id, title="Sharper title"))
    )

    assert updated.title == "Sharper title"
    assert updated.status == IdeaStatus.SUBMITTED


@pytest.mark.unit
def test_editing_draft_keeps_draft() -> None:
    repository = InMemoryIdeaRepository()
    idea_id = seed_idea(repository, status=IdeaStatus.DRAFT)

    updated = asyncio.run(update_idea(repository, context(), UpdateIdeaCommand(idea_id=idea_id, category="OTHER")))

    assert updated.status == IdeaStatus.DRAFT
    assert updated.category == "OTHER"


@pytest.mark.unit
@pytest.mark.parametrize("status", [IdeaStatus.UNDER_REVIEW, IdeaStatus.ACCEPTED, IdeaStatus.REJECTED])
def test_locked_ideas_cannot_be_changed(status: IdeaStatus) -> None:
    repository = InMemoryIdeaRepository()
    idea_id = seed_idea(repository, status=status)

    with pytest.raises(InvalidStateError):
        asyncio.run(update_idea(repository, context(), UpdateIdeaCommand(idea_id=idea_id, title="New title")))
    with pytest.raises(InvalidStateError):
        asyncio.run(delete_idea(repository, context(), idea_id=idea_id))


@pytest.mark.unit
def test_only_owner_may_delete() -> None:
    repository = InMemoryIdeaRepository()
    idea_id = seed_idea(repository)

    with pytest.raises(OwnershipError):
        asyncio.run(delete_idea(repository, context("admin-1", Role.ADMIN), idea_id=idea_id))

    asyncio.run(delete_idea(repository, context(), idea_id=idea_id))
    assert idea_id not in repository.ideas


@pytest.mark.unit
def test_lifecycle_helpers() -> None:
    assert is_editable(IdeaStatus.DRAFT) is True
    assert is_editable(IdeaStatus.UNDER_REVIEW) is False
    assert status_after_owner_edit(IdeaStatus.NEEDS_REVISION) == IdeaStatus.SUBMITTED
    assert status_after_owner_edit("SUBMITTED") == IdeaStatus.SUBMITTED
