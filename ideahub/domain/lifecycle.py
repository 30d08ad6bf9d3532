from __future__ import annotations

from ideahub.domain.models import IdeaStatus

# Open work shown in the evaluation queue.
QUEUE_STATUSES: tuple[IdeaStatus, ...] = (IdeaStatus.SUBMITTED, IdeaStatus.UNDER_REVIEW)

# Statuses in which the owner may still edit or delete an idea.
EDITABLE_STATUSES: frozenset[IdeaStatus] = frozenset(
    {IdeaStatus.DRAFT, IdeaStatus.SUBMITTED, IdeaStatus.NEEDS_REVISION}
)

# Decisions an evaluator may record for a single idea.
EVALUATION_DECISIONS: tuple[IdeaStatus, ...] = (
    IdeaStatus.ACCEPTED,
    IdeaStatus.REJECTED,
    IdeaStatus.NEEDS_REVISION,
)

# Statuses reachable through a bulk status update.
BULK_TARGET_STATUSES: tuple[IdeaStatus, ...] = (
    IdeaStatus.UNDER_REVIEW,
    IdeaStatus.NEEDS_REVISION,
    IdeaStatus.ACCEPTED,
    IdeaStatus.REJECTED,
)


def is_editable(status: str) -> bool:
    return status in EDITABLE_STATUSES


def status_after_owner_edit(status: str) -> IdeaStatus:
    # Editing an idea sent back for revision resubmits it for review.
    if status == IdeaStatus.NEEDS_REVISION:
        return IdeaStatus.SUBMITTED
    return IdeaStatus(status)
