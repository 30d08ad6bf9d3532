from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ideahub.domain.ids import new_evaluation_id, new_idea_id
from ideahub.domain.models import (
    EvaluationRecord,
    IdeaListQuery,
    IdeaSnapshot,
    IdeaSortBy,
    SortOrder,
)


@dataclass
class _IdeaRow:
    id: int
    idea_id: str
    owner_id: str
    title: str
    description: str
    category: str
    status: str
    submitter_name: str | None = None
    submitter_email: str | None = None
    assignee_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True)
class _EvaluationRow:
    id: int
    record: EvaluationRecord


@dataclass
class InMemoryIdeaRepository:
    """Non-network repository with deterministic behavior for local mode and tests."""

    ideas: dict[str, _IdeaRow] = field(default_factory=dict)
    evaluations: list[_EvaluationRow] = field(default_factory=list)
    bulk_writes: list[tuple[str, tuple[str, ...], int]] = field(default_factory=list)
    next_row_id: int = 1

    async def create_idea(
        self,
        *,
        owner_id: str,
        title: str,
        description: str,
        category: str,
        status: str,
        submitter_name: str | None = None,
        submitter_email: str | None = None,
    ) -> IdeaSnapshot:
        row = _IdeaRow(
            id=self._allocate_row_id(),
            idea_id=new_idea_id(),
            owner_id=owner_id,
            title=title,
            description=description,
            category=category,
            status=status,
            submitter_name=submitter_name,
            submitter_email=submitter_email,
        )
        self.ideas[row.idea_id] = row
        return _snapshot(row)

    async def get_idea(self, *, idea_id: str) -> IdeaSnapshot | None:
        row = self.ideas.get(idea_id)
        if row is None:
            return None
        return _snapshot(row)

    async def get_ideas_by_ids(self, *, idea_ids: tuple[str, ...]) -> list[IdeaSnapshot]:
        rows = [self.ideas[idea_id] for idea_id in dict.fromkeys(idea_ids) if idea_id in self.ideas]
        rows.sort(key=lambda row: row.id)
        return [_snapshot(row) for row in rows]

    async def list_ideas(self, *, query: IdeaListQuery) -> list[IdeaSnapshot]:
        rows = self._filter(query)
        reverse = query.sort_order == SortOrder.DESC
        if query.sort_by == IdeaSortBy.TITLE:
            rows.sort(key=lambda row: (row.title.lower(), row.id), reverse=reverse)
        elif query.sort_by == IdeaSortBy.STATUS:
            rows.sort(key=lambda row: (row.status, row.id), reverse=reverse)
        else:
            rows.sort(key=lambda row: (row.created_at, row.id), reverse=reverse)

        start = query.offset
        end = query.offset + query.limit
        return [_snapshot(row) for row in rows[start:end]]

    async def count_ideas(self, *, query: IdeaListQuery) -> int:
        return len(self._filter(query))

    async def update_idea(
        self,
        *,
        idea_id: str,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> IdeaSnapshot | None:
        row = self.ideas.get(idea_id)
        if row is None:
            return None
        if title is not None:
            row.title = title
        if description is not None:
            row.description = description
        if category is not None:
            row.category = category
        if status is not None:
            row.status = status
        row.updated_at = datetime.now(tz=UTC)
        return _snapshot(row)

    async def delete_idea(self, *, idea_id: str) -> bool:
        # Evaluation history is kept; records only reference the idea id.
        return self.ideas.pop(idea_id, None) is not None

    async def append_evaluation(
        self,
        *,
        idea_id: str,
        evaluator_id: str,
        status: str,
        comments: str,
        file_url: str | None = None,
    ) -> EvaluationRecord:
        row = self.ideas.get(idea_id)
        if row is None:
            raise KeyError(f"idea not found: {idea_id}")
        now = datetime.now(tz=UTC)
        record = EvaluationRecord(
            id=new_evaluation_id(),
            idea_id=idea_id,
            evaluator_id=evaluator_id,
            status=status,
            comments=comments,
            file_url=file_url,
            created_at=now,
        )
        self.evaluations.append(_EvaluationRow(id=self._allocate_row_id(), record=record))
        row.status = status
        row.updated_at = now
        return record

    async def list_evaluations(self, *, idea_id: str) -> list[EvaluationRecord]:
        rows = [row for row in self.evaluations if row.record.idea_id == idea_id]
        rows.sort(key=lambda row: (row.record.created_at, row.id), reverse=True)
        return [row.record for row in rows]

    async def bulk_update_status(self, *, idea_ids: tuple[str, ...], status: str) -> int:
        rows = self._existing(idea_ids)
        now = datetime.now(tz=UTC)
        for row in rows:
            row.status = status
            row.updated_at = now
        self.bulk_writes.append(("status", tuple(row.idea_id for row in rows), len(rows)))
        return len(rows)

    async def bulk_assign(self, *, idea_ids: tuple[str, ...], assignee_id: str) -> int:
        rows = self._existing(idea_ids)
        now = datetime.now(tz=UTC)
        for row in rows:
            row.assignee_id = assignee_id
            row.updated_at = now
        self.bulk_writes.append(("assign", tuple(row.idea_id for row in rows), len(rows)))
        return len(rows)

    def _existing(self, idea_ids: tuple[str, ...]) -> list[_IdeaRow]:
        return [self.ideas[idea_id] for idea_id in dict.fromkeys(idea_ids) if idea_id in self.ideas]

    def _filter(self, query: IdeaListQuery) -> list[_IdeaRow]:
        statuses = set(query.statuses) if query.statuses is not None else None
        rows: list[_IdeaRow] = []
        for row in self.ideas.values():
            if statuses is not None and row.status not in statuses:
                continue
            if query.owner_id is not None and row.owner_id != query.owner_id:
                continue
            rows.append(row)
        return rows

    def _allocate_row_id(self) -> int:
        row_id = self.next_row_id
        self.next_row_id += 1
        return row_id


def _snapshot(row: _IdeaRow) -> IdeaSnapshot:
    return IdeaSnapshot(
        id=row.idea_id,
        title=row.title,
        description=row.description,
        category=row.category,
        status=row.status,
        owner_id=row.owner_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        submitter_name=row.submitter_name,
        submitter_email=row.submitter_email,
        assignee_id=row.assignee_id,
    )
