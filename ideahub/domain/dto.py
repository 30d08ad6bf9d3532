from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ideahub.domain.models import IdeaSortBy, IdeaStatus, SortOrder


@dataclass(frozen=True)
class GetQueueCommand:
    limit: int = 25
    offset: int = 0
    now: datetime | None = None


@dataclass(frozen=True)
class SubmitEvaluationCommand:
    idea_id: str
    evaluator_id: str
    status: str | None
    comments: str | None
    file_url: str | None = None


@dataclass(frozen=True)
class BulkStatusUpdateCommand:
    item_ids: list[str] | None
    status: str | None
    actor_id: str


@dataclass(frozen=True)
class BulkStatusUpdateResult:
    updated: int
    requested: int


@dataclass(frozen=True)
class BulkAssignCommand:
    item_ids: list[str] | None
    assignee_id: str | None
    actor_id: str


@dataclass(frozen=True)
class BulkAssignResult:
    assigned: int
    requested: int


@dataclass(frozen=True)
class ExportCommand:
    item_ids: list[str] | None = None
    statuses: tuple[IdeaStatus, ...] | None = None


@dataclass(frozen=True)
class ExportResult:
    payload: bytes
    rows_count: int


@dataclass(frozen=True)
class CreateIdeaCommand:
    title: str
    description: str
    category: str
    draft: bool = False
    submitter_name: str | None = None


@dataclass(frozen=True)
class UpdateIdeaCommand:
    idea_id: str
    title: str | None = None
    description: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class ListIdeasCommand:
    statuses: tuple[IdeaStatus, ...] | None = None
    sort_by: IdeaSortBy = IdeaSortBy.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    limit: int = 10
    offset: int = 0
