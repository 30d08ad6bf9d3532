from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ideahub.domain.models import IdeaCategory


class ErrorResponse(BaseModel):
    detail: str
    code: str
    field: str | None = None
    attempted_role: str | None = None
    required_roles: list[str] | None = None
    errors: list[dict[str, object]] | None = None


class HealthResponse(BaseModel):
    status: str
    service: str


class ReadyResponse(BaseModel):
    status: str
    service: str
    repository: str


class CreateIdeaRequest(BaseModel):
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=5000)
    category: IdeaCategory
    draft: bool = False
    submitter_name: str | None = Field(default=None, min_length=1, max_length=128)


class UpdateIdeaRequest(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=5000)
    category: IdeaCategory | None = None


class IdeaResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    status: str
    owner_id: str
    submitter_name: str | None = None
    submitter_email: str | None = None
    assignee_id: str | None = None
    created_at: datetime
    updated_at: datetime


class PaginationResponse(BaseModel):
    total: int = Field(ge=0)
    limit: int = Field(ge=1, le=100)
    offset: int = Field(ge=0)


class IdeaListResponse(BaseModel):
    items: list[IdeaResponse]
    pagination: PaginationResponse


class DeleteIdeaResponse(BaseModel):
    id: str
    deleted: bool


class QueueItemResponse(BaseModel):
    id: str
    title: str
    category: str
    status: str
    submitter_name: str
    assignee_id: str | None = None
    created_at: datetime
    days_in_queue: int = Field(ge=0)


class QueueResponse(BaseModel):
    items: list[QueueItemResponse]
    pagination: PaginationResponse


# Field constraints are enforced by the domain layer so that every failure
# is reported with the same 400 shape and check order.
class SubmitEvaluationRequest(BaseModel):
    status: str | None = None
    comments: str | None = None
    file_url: str | None = None


class EvaluationResponse(BaseModel):
    id: str
    idea_id: str
    evaluator_id: str
    status: str
    comments: str
    file_url: str | None = None
    created_at: datetime


class EvaluationHistoryResponse(BaseModel):
    idea_id: str
    items: list[EvaluationResponse]


class BulkStatusUpdateRequest(BaseModel):
    item_ids: list[str] | None = None
    status: str | None = None


class BulkStatusUpdateResponse(BaseModel):
    updated: int = Field(ge=0)
    requested: int = Field(ge=0)


class BulkAssignRequest(BaseModel):
    item_ids: list[str] | None = None
    assignee_id: str | None = None


class BulkAssignResponse(BaseModel):
    assigned: int = Field(ge=0)
    requested: int = Field(ge=0)
