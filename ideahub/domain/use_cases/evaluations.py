from __future__ import annotations

import logging
from typing import cast

from ideahub.domain.contracts import IdeaRepository
from ideahub.domain.dto import SubmitEvaluationCommand
from ideahub.domain.errors import DomainValidationError, NotFoundError
from ideahub.domain.lifecycle import EVALUATION_DECISIONS
from ideahub.domain.models import EvaluationRecord

COMPONENT_ID_SUBMIT = "domain.evaluation.submit"
COMPONENT_ID_HISTORY = "domain.evaluation.history"

MAX_COMMENTS_LENGTH = 500

logger = logging.getLogger("ideahub.evaluations")


def validate_evaluation(cmd: SubmitEvaluationCommand) -> None:
    """Field checks run in a fixed order; the first failure is reported."""
    if not cmd.status or not cmd.comments:
        raise DomainValidationError("Missing required fields: status, comments", field="status,comments")
    if cmd.status not in EVALUATION_DECISIONS:
        allowed = ", ".join(EVALUATION_DECISIONS)
        raise DomainValidationError(f"Invalid status. Must be one of: {allowed}", field="status")
    if len(cmd.comments) > MAX_COMMENTS_LENGTH:
        raise DomainValidationError(
            f"Comments must be {MAX_COMMENTS_LENGTH} characters or less",
            field="comments",
        )


async def submit_evaluation(repository: IdeaRepository, cmd: SubmitEvaluationCommand) -> EvaluationRecord:
    validate_evaluation(cmd)

    idea = await repository.get_idea(idea_id=cmd.idea_id)
    if idea is None:
        raise NotFoundError("Idea not found")

    record = await repository.append_evaluation(
        idea_id=cmd.idea_id,
        evaluator_id=cmd.evaluator_id,
        status=cast(str, cmd.status),
        comments=cast(str, cmd.comments),
        file_url=cmd.file_url,
    )
    logger.info(
        "evaluation submitted",
        extra={
            "component": COMPONENT_ID_SUBMIT,
            "idea_id": cmd.idea_id,
            "subject_id": cmd.evaluator_id,
            "status": record.status,
        },
    )
    return record


async def get_evaluation_history(repository: IdeaRepository, *, idea_id: str) -> list[EvaluationRecord]:
    idea = await repository.get_idea(idea_id=idea_id)
    if idea is None:
        raise NotFoundError("Idea not found")
    return await repository.list_evaluations(idea_id=idea_id)
