from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ideahub.roles import Role


# Canonical idea lifecycle states.
#
# IMPORTANT:
# - Keep this enum synchronized with ideahub/domain/lifecycle.py.
# - Keep this enum synchronized with the status CHECK constraint in
#   db/migrations/000001_bootstrap.up.sql.
class IdeaStatus(StrEnum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    NEEDS_REVISION = "NEEDS_REVISION"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class IdeaCategory(StrEnum):
    PRODUCT = "PRODUCT"
    PROCESS = "PROCESS"
    MARKETING = "MARKETING"
    OTHER = "OTHER"


class IdeaSortBy(StrEnum):
    CREATED_AT = "created_at"
    TITLE = "title"
    STATUS = "status"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Identity:
    subject_id: str
    email: str | None = None


@dataclass(frozen=True)
class RequestContext:
    """Caller identity plus the role derived for this request only."""

    subject_id: str
    email: str | None
    role: Role


@dataclass(frozen=True)
class IdeaSnapshot:
    id: str
    title: str
    description: str
    category: str
    status: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    submitter_name: str | None = None
    submitter_email: str | None = None
    assignee_id: str | None = None


@dataclass(frozen=True)
class EvaluationRecord:
    id: str
    idea_id: str
    evaluator_id: str
    status: str
    comments: str
    created_at: datetime
    file_url: str | None = None


@dataclass(frozen=True)
class IdeaListQuery:
    statuses: tuple[IdeaStatus, ...] | None = None
    owner_id: str | None = None
    sort_by: IdeaSortBy = IdeaSortBy.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    limit: int = 10
    offset: int = 0


@dataclass(frozen=True)
class Pagination:
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class IdeaPage:
    items: list[IdeaSnapshot]
    pagination: Pagination


@dataclass(frozen=True)
class QueueItem:
    id: str
    title: str
    category: str
    status: str
    submitter_name: str
    assignee_id: str | None
    created_at: datetime
    days_in_queue: int


@dataclass(frozen=True)
class QueuePage:
    items: list[QueueItem]
    pagination: Pagination
