from __future__ import annotations

import logging

from ideahub.domain.contracts import MAX_BATCH_SIZE, IdeaRepository
from ideahub.domain.dto import ExportCommand, ExportResult
from ideahub.domain.errors import DomainValidationError
from ideahub.domain.models import IdeaListQuery, IdeaSnapshot, IdeaSortBy, SortOrder
from ideahub.lib.csv_export import ExportRow, encode_export_rows

COMPONENT_ID = "domain.export.csv"

logger = logging.getLogger("ideahub.export")


async def export_to_csv(repository: IdeaRepository, cmd: ExportCommand) -> ExportResult:
    """Render ideas as CSV.

    With explicit ids, rows follow the order the ids were given (first
    occurrence wins, blank and unknown ids are skipped). The bound applies
    to the ids as given, before blanks are dropped. Without ids, a status filter
    selects up to MAX_BATCH_SIZE ideas, oldest first.
    """
    if cmd.item_ids is not None:
        if len(cmd.item_ids) > MAX_BATCH_SIZE:
            raise DomainValidationError(
                f"CSV export limited to {MAX_BATCH_SIZE} items maximum",
                field="ids",
            )
        requested = dict.fromkeys(idea_id for idea_id in cmd.item_ids if idea_id)
        ideas = await _ideas_in_request_order(repository, tuple(requested))
    elif cmd.statuses:
        ideas = await repository.list_ideas(
            query=IdeaListQuery(
                statuses=cmd.statuses,
                sort_by=IdeaSortBy.CREATED_AT,
                sort_order=SortOrder.ASC,
                limit=MAX_BATCH_SIZE,
                offset=0,
            )
        )
    else:
        raise DomainValidationError("Missing ids query parameter", field="ids")

    rows = [to_export_row(idea) for idea in ideas]
    logger.info("export rendered", extra={"component": COMPONENT_ID, "count": len(rows)})
    return ExportResult(payload=encode_export_rows(rows), rows_count=len(rows))


def to_export_row(idea: IdeaSnapshot) -> ExportRow:
    return ExportRow(
        submitter=idea.submitter_name or idea.submitter_email or "Unknown",
        title=idea.title,
        category=idea.category,
        date=idea.created_at.date().isoformat(),
        status=idea.status,
    )


async def _ideas_in_request_order(repository: IdeaRepository, idea_ids: tuple[str, ...]) -> list[IdeaSnapshot]:
    if not idea_ids:
        return []
    found = {idea.id: idea for idea in await repository.get_ideas_by_ids(idea_ids=idea_ids)}
    return [found[idea_id] for idea_id in idea_ids if idea_id in found]
