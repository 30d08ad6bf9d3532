from __future__ import annotations

from ideahub.api.handlers.deps import ApiDeps
from ideahub.api.schemas import EvaluationHistoryResponse, EvaluationResponse
from ideahub.domain.dto import SubmitEvaluationCommand
from ideahub.domain.models import EvaluationRecord, RequestContext
from ideahub.domain.use_cases.evaluations import get_evaluation_history, submit_evaluation


async def submit_evaluation_handler(
    deps: ApiDeps,
    ctx: RequestContext,
    *,
    idea_id: str,
    status: str | None,
    comments: str | None,
    file_url: str | None,
) -> EvaluationResponse:
    record = await submit_evaluation(
        deps.repository,
        SubmitEvaluationCommand(
            idea_id=idea_id,
            evaluator_id=ctx.subject_id,
            status=status,
            comments=comments,
            file_url=file_url,
        ),
    )
    return to_evaluation_response(record)


async def evaluation_history_handler(deps: ApiDeps, *, idea_id: str) -> EvaluationHistoryResponse:
    records = await get_evaluation_history(deps.repository, idea_id=idea_id)
    return EvaluationHistoryResponse(
        idea_id=idea_id,
        items=[to_evaluation_response(record) for record in records],
    )


def to_evaluation_response(record: EvaluationRecord) -> EvaluationResponse:
    return EvaluationResponse(
        id=record.id,
        idea_id=record.idea_id,
        evaluator_id=record.evaluator_id,
        status=record.status,
        comments=record.comments,
        file_url=record.file_url,
        created_at=record.created_at,
    )
