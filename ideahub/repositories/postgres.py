from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import asyncpg

from ideahub.domain.errors import DomainInvariantError
from ideahub.domain.ids import new_evaluation_id, new_idea_id
from ideahub.domain.models import (
    EvaluationRecord,
    IdeaListQuery,
    IdeaSnapshot,
    IdeaSortBy,
    SortOrder,
)
from ideahub.repositories.sql_loader import load_sql

SQL_CREATE_IDEA = load_sql("create_idea.sql")
SQL_GET_IDEA = load_sql("get_idea.sql")
SQL_GET_IDEAS_BY_IDS = load_sql("get_ideas_by_ids.sql")
SQL_UPDATE_IDEA = load_sql("update_idea.sql")
SQL_DELETE_IDEA = load_sql("delete_idea.sql")
SQL_INSERT_EVALUATION = load_sql("insert_evaluation.sql")
SQL_SET_IDEA_STATUS = load_sql("set_idea_status.sql")
SQL_LIST_EVALUATIONS = load_sql("list_evaluations.sql")
SQL_BULK_UPDATE_STATUS = load_sql("bulk_update_status.sql")
SQL_BULK_ASSIGN = load_sql("bulk_assign.sql")

IDEA_COLUMNS = (
    "public_id, owner_id, title, description, category, status, "
    "submitter_name, submitter_email, assignee_id, created_at, updated_at"
)

_ORDER_COLUMNS: dict[IdeaSortBy, str] = {
    IdeaSortBy.CREATED_AT: "created_at",
    IdeaSortBy.TITLE: "lower(title)",
    IdeaSortBy.STATUS: "status",
}


def _is_unique_violation(exc: Exception) -> bool:
    return getattr(exc, "sqlstate", None) == "23505"


@dataclass
class AsyncpgPoolManager:
    dsn: str
    min_size: int = 1
    max_size: int = 5
    pool: Any | None = None

    async def startup(self) -> None:
        self.pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
        )

    async def shutdown(self) -> None:
        if self.pool is None:
            return
        await self.pool.close()
        self.pool = None


@dataclass
class PostgresIdeaRepository:
    pool_manager: AsyncpgPoolManager

    def _pool(self) -> Any:
        if self.pool_manager.pool is None:
            raise RuntimeError("postgres pool is not initialized")
        return self.pool_manager.pool

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
        pool = self._pool()
        async with pool.acquire() as conn:
            for _ in range(5):
                try:
                    row = await conn.fetchrow(
                        SQL_CREATE_IDEA,
                        new_idea_id(),
                        owner_id,
                        title,
                        description,
                        category,
                        status,
                        submitter_name,
                        submitter_email,
                    )
                except Exception as exc:
                    if _is_unique_violation(exc):
                        continue
                    raise
                if row is None:
                    raise DomainInvariantError("failed to create idea")
                return _idea_from_row(row)
        raise DomainInvariantError("failed to allocate unique idea public id")

    async def get_idea(self, *, idea_id: str) -> IdeaSnapshot | None:
        pool = self._pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(SQL_GET_IDEA, idea_id)
        if row is None:
            return None
        return _idea_from_row(row)

    async def get_ideas_by_ids(self, *, idea_ids: tuple[str, ...]) -> list[IdeaSnapshot]:
        if not idea_ids:
            return []
        pool = self._pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(SQL_GET_IDEAS_BY_IDS, list(idea_ids))
        return [_idea_from_row(row) for row in rows]

    async def list_ideas(self, *, query: IdeaListQuery) -> list[IdeaSnapshot]:
        where_sql, args = _where_clause(query)
        order_column = _ORDER_COLUMNS[query.sort_by]
        order_direction = "DESC" if query.sort_order == SortOrder.DESC else "ASC"

        args.extend([query.limit, query.offset])
        limit_placeholder = f"${len(args) - 1}"
        offset_placeholder = f"${len(args)}"
        sql = (
            f"SELECT {IDEA_COLUMNS} FROM ideas {where_sql} "
            f"ORDER BY {order_column} {order_direction}, id {order_direction} "
            f"LIMIT {limit_placeholder} OFFSET {offset_placeholder}"
        )

        pool = self._pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql, *args)
        return [_idea_from_row(row) for row in rows]

    async def count_ideas(self, *, query: IdeaListQuery) -> int:
        where_sql, args = _where_clause(query)
        pool = self._pool()
        async with pool.acquire() as conn:
            total = await conn.fetchval(f"SELECT count(*) FROM ideas {where_sql}", *args)
        return int(total or 0)

    async def update_idea(
        self,
        *,
        idea_id: str,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> IdeaSnapshot | None:
        pool = self._pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(SQL_UPDATE_IDEA, idea_id, title, description, category, status)
        if row is None:
            return None
        return _idea_from_row(row)

    async def delete_idea(self, *, idea_id: str) -> bool:
        pool = self._pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval(SQL_DELETE_IDEA, idea_id)
        return deleted is not None

    async def append_evaluation(
        self,
        *,
        idea_id: str,
        evaluator_id: str,
        status: str,
        comments: str,
        file_url: str | None = None,
    ) -> EvaluationRecord:
        pool = self._pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                touched = await conn.fetchval(SQL_SET_IDEA_STATUS, idea_id, status)
                if touched is None:
                    raise KeyError(f"idea not found: {idea_id}")
                row = await conn.fetchrow(
                    SQL_INSERT_EVALUATION,
                    new_evaluation_id(),
                    idea_id,
                    evaluator_id,
                    status,
                    comments,
                    file_url,
                )
        if row is None:
            raise DomainInvariantError("failed to append evaluation")
        return _evaluation_from_row(row)

    async def list_evaluations(self, *, idea_id: str) -> list[EvaluationRecord]:
        pool = self._pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(SQL_LIST_EVALUATIONS, idea_id)
        return [_evaluation_from_row(row) for row in rows]

    async def bulk_update_status(self, *, idea_ids: tuple[str, ...], status: str) -> int:
        return await self._bulk_write(SQL_BULK_UPDATE_STATUS, idea_ids, status)

    async def bulk_assign(self, *, idea_ids: tuple[str, ...], assignee_id: str) -> int:
        return await self._bulk_write(SQL_BULK_ASSIGN, idea_ids, assignee_id)

    async def _bulk_write(self, sql: str, idea_ids: tuple[str, ...], value: str) -> int:
        if not idea_ids:
            return 0
        pool = self._pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                rows = await conn.fetch(sql, list(dict.fromkeys(idea_ids)), value)
        return len(rows)


def _where_clause(query: IdeaListQuery) -> tuple[str, list[object]]:
    where_parts: list[str] = []
    args: list[object] = []
    if query.statuses is not None:
        args.append([str(status) for status in query.statuses])
        where_parts.append(f"status = ANY(${len(args)}::text[])")
    if query.owner_id is not None:
        args.append(query.owner_id)
        where_parts.append(f"owner_id = ${len(args)}")
    where_sql = f"WHERE {' AND '.join(where_parts)}" if where_parts else ""
    return where_sql, args


def _idea_from_row(row: Any) -> IdeaSnapshot:
    return IdeaSnapshot(
        id=row["public_id"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        status=row["status"],
        owner_id=row["owner_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        submitter_name=_as_str(row["submitter_name"]),
        submitter_email=_as_str(row["submitter_email"]),
        assignee_id=_as_str(row["assignee_id"]),
    )


def _evaluation_from_row(row: Any) -> EvaluationRecord:
    return EvaluationRecord(
        id=row["public_id"],
        idea_id=row["idea_public_id"],
        evaluator_id=row["evaluator_id"],
        status=row["status"],
        comments=row["comments"],
        file_url=_as_str(row["file_url"]),
        created_at=row["created_at"],
    )


def _as_str(value: object | None) -> str | None:
    if isinstance(value, str):
        return value
    return None
