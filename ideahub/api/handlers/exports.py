from __future__ import annotations

from ideahub.api.handlers.deps import ApiDeps
from ideahub.domain.dto import ExportCommand, ExportResult
from ideahub.domain.models import IdeaStatus
from ideahub.domain.use_cases.export import export_to_csv

EXPORT_FILENAME = "ideas-export.csv"


async def export_csv_handler(
    deps: ApiDeps,
    *,
    ids: str | None,
    statuses: tuple[IdeaStatus, ...] | None,
) -> ExportResult:
    """Render the requested ideas as CSV bytes.

    ids is the raw comma-separated query value. Every segment counts toward
    the export bound, blank ones included.
    """
    return await export_to_csv(
        deps.repository,
        ExportCommand(item_ids=parse_id_list(ids), statuses=statuses),
    )


def parse_id_list(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",")]
