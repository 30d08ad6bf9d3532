from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import Awaitable, Callable
import logging

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ideahub.api.access import AccessGate
from ideahub.api.handlers.bulk import bulk_assign_handler, bulk_status_update_handler
from ideahub.api.handlers.deps import ApiDeps
from ideahub.api.handlers.evaluations import evaluation_history_handler, submit_evaluation_handler
from ideahub.api.handlers.exports import EXPORT_FILENAME, export_csv_handler
from ideahub.api.handlers.ideas import (
    create_idea_handler,
    delete_idea_handler,
    get_idea_handler,
    list_ideas_handler,
    update_idea_handler,
)
from ideahub.api.handlers.queue import get_queue_handler
from ideahub.api.schemas import (
    BulkAssignRequest,
    BulkAssignResponse,
    BulkStatusUpdateRequest,
    BulkStatusUpdateResponse,
    CreateIdeaRequest,
    DeleteIdeaResponse,
    ErrorResponse,
    EvaluationHistoryResponse,
    EvaluationResponse,
    HealthResponse,
    IdeaListResponse,
    IdeaResponse,
    QueueResponse,
    ReadyResponse,
    SubmitEvaluationRequest,
    UpdateIdeaRequest,
)
from ideahub.domain.error_taxonomy import http_status_for
from ideahub.domain.errors import DomainError, DomainValidationError, PermissionDeniedError
from ideahub.domain.models import IdeaSortBy, IdeaStatus, RequestContext, SortOrder
from ideahub.domain.use_cases.ideas import LISTING_DEFAULT_LIMIT
from ideahub.domain.use_cases.queue import QUEUE_DEFAULT_LIMIT

SERVICE_NAME = "ideahub"

INTERNAL_ERROR_DETAIL = "Internal server error"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def build_app(
    run_id: str,
    api_deps: ApiDeps,
    on_startup: Callable[[], Awaitable[None]] | None = None,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    logger = logging.getLogger("runtime")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        del app
        logger.info("service started", extra={"service": SERVICE_NAME, "run_id": run_id})

        if on_startup is not None:
            await on_startup()

        yield

        if on_shutdown is not None:
            await on_shutdown()

        logger.info("service stopped", extra={"service": SERVICE_NAME, "run_id": run_id})

    app = FastAPI(title="ideahub", version="0.1.0", lifespan=lifespan)
    _install_error_handlers(app, logger=logger, run_id=run_id)

    gate = AccessGate(verifier=api_deps.identity_verifier)
    require_authenticated = gate.require_authenticated()
    require_evaluator = gate.require_evaluator()

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service=SERVICE_NAME)

    @app.get("/ready", response_model=ReadyResponse, tags=["System"])
    async def ready() -> ReadyResponse:
        return ReadyResponse(status="ready", service=SERVICE_NAME, repository=api_deps.repository_kind)

    @app.post("/api/ideas", response_model=IdeaResponse, status_code=201, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def create_idea(
        request: CreateIdeaRequest,
        ctx: RequestContext = Depends(require_authenticated),
    ) -> IdeaResponse:
        return await create_idea_handler(
            api_deps,
            ctx,
            title=request.title,
            description=request.description,
            category=request.category.value,
            draft=request.draft,
            submitter_name=request.submitter_name,
        )

    @app.get("/api/ideas", response_model=IdeaListResponse, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def list_own_ideas(
        status: list[IdeaStatus] | None = Query(default=None),
        sort_by: IdeaSortBy = Query(default=IdeaSortBy.CREATED_AT),
        sort_order: SortOrder = Query(default=SortOrder.DESC),
        limit: int = Query(default=LISTING_DEFAULT_LIMIT, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        ctx: RequestContext = Depends(require_authenticated),
    ) -> IdeaListResponse:
        return await list_ideas_handler(
            api_deps,
            owner_id=ctx.subject_id,
            statuses=tuple(status) if status else None,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        )

    # Declared before /api/ideas/{idea_id} so "all" is not captured as an id.
    @app.get("/api/ideas/all", response_model=IdeaListResponse, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def list_all_ideas(
        status: list[IdeaStatus] | None = Query(default=None),
        sort_by: IdeaSortBy = Query(default=IdeaSortBy.CREATED_AT),
        sort_order: SortOrder = Query(default=SortOrder.DESC),
        limit: int = Query(default=LISTING_DEFAULT_LIMIT, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        ctx: RequestContext = Depends(require_evaluator),
    ) -> IdeaListResponse:
        del ctx
        return await list_ideas_handler(
            api_deps,
            owner_id=None,
            statuses=tuple(status) if status else None,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        )

    @app.get("/api/ideas/{idea_id}", response_model=IdeaResponse, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def get_idea(idea_id: str, ctx: RequestContext = Depends(require_authenticated)) -> IdeaResponse:
        return await get_idea_handler(api_deps, ctx, idea_id=idea_id)

    @app.put("/api/ideas/{idea_id}", response_model=IdeaResponse, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def update_idea(
        idea_id: str,
        request: UpdateIdeaRequest,
        ctx: RequestContext = Depends(require_authenticated),
    ) -> IdeaResponse:
        return await update_idea_handler(
            api_deps,
            ctx,
            idea_id=idea_id,
            title=request.title,
            description=request.description,
            category=request.category.value if request.category else None,
        )

    @app.delete("/api/ideas/{idea_id}", response_model=DeleteIdeaResponse, responses=ERROR_RESPONSES, tags=["Ideas"])
    async def delete_idea(idea_id: str, ctx: RequestContext = Depends(require_authenticated)) -> DeleteIdeaResponse:
        return await delete_idea_handler(api_deps, ctx, idea_id=idea_id)

    @app.get("/api/evaluation-queue", response_model=QueueResponse, responses=ERROR_RESPONSES, tags=["Evaluation"])
    async def evaluation_queue(
        limit: int = Query(default=QUEUE_DEFAULT_LIMIT),
        offset: int = Query(default=0),
        ctx: RequestContext = Depends(require_evaluator),
    ) -> QueueResponse:
        del ctx
        return await get_queue_handler(api_deps, limit=limit, offset=offset)

    @app.post(
        "/api/ideas/{idea_id}/evaluate",
        response_model=EvaluationResponse,
        responses=ERROR_RESPONSES,
        tags=["Evaluation"],
    )
    async def evaluate_idea(
        idea_id: str,
        request: SubmitEvaluationRequest,
        ctx: RequestContext = Depends(require_evaluator),
    ) -> EvaluationResponse:
        return await submit_evaluation_handler(
            api_deps,
            ctx,
            idea_id=idea_id,
            status=request.status,
            comments=request.comments,
            file_url=request.file_url,
        )

    @app.get(
        "/api/ideas/{idea_id}/evaluation-history",
        response_model=EvaluationHistoryResponse,
        responses=ERROR_RESPONSES,
        tags=["Evaluation"],
    )
    async def evaluation_history(
        idea_id: str,
        ctx: RequestContext = Depends(require_evaluator),
    ) -> EvaluationHistoryResponse:
        del ctx
        return await evaluation_history_handler(api_deps, idea_id=idea_id)

    @app.post(
        "/api/evaluation-queue/bulk-status-update",
        response_model=BulkStatusUpdateResponse,
        responses=ERROR_RESPONSES,
        tags=["Evaluation"],
    )
    async def bulk_status_update(
        request: BulkStatusUpdateRequest,
        ctx: RequestContext = Depends(require_evaluator),
    ) -> BulkStatusUpdateResponse:
        return await bulk_status_update_handler(api_deps, ctx, item_ids=request.item_ids, status=request.status)

    @app.post(
        "/api/evaluation-queue/bulk-assign",
        response_model=BulkAssignResponse,
        responses=ERROR_RESPONSES,
        tags=["Evaluation"],
    )
    async def bulk_assign(
        request: BulkAssignRequest,
        ctx: RequestContext = Depends(require_evaluator),
    ) -> BulkAssignResponse:
        return await bulk_assign_handler(api_deps, ctx, item_ids=request.item_ids, assignee_id=request.assignee_id)

    @app.get(
        "/api/evaluation-queue/export",
        response_class=Response,
        responses={**ERROR_RESPONSES, 200: {"content": {"text/csv": {}}}},
        tags=["Evaluation"],
    )
    async def export_csv(
        ids: str | None = Query(default=None),
        status: list[IdeaStatus] | None = Query(default=None),
        ctx: RequestContext = Depends(require_evaluator),
    ) -> Response:
        del ctx
        result = await export_csv_handler(
            api_deps,
            ids=ids,
            statuses=tuple(status) if status else None,
        )
        return Response(
            content=result.payload,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )

    return app


def _install_error_handlers(app: FastAPI, *, logger: logging.Logger, run_id: str) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = http_status_for(exc.code)
        if status_code >= 500:
            logger.error(
                "request failed",
                exc_info=exc,
                extra={"service": SERVICE_NAME, "run_id": run_id, "path": request.url.path},
            )
            return _error_response(status_code, ErrorResponse(detail=INTERNAL_ERROR_DETAIL, code="internal_error"))

        body = ErrorResponse(detail=str(exc), code=exc.code)
        if isinstance(exc, PermissionDeniedError):
            body.attempted_role = exc.attempted_role
            body.required_roles = list(exc.required_roles)
        elif isinstance(exc, DomainValidationError):
            body.field = exc.field
        return _error_response(status_code, body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        del request
        errors: list[dict[str, object]] = []
        for error in exc.errors():
            errors.append(
                {
                    "loc": [str(part) for part in error.get("loc", ())],
                    "msg": error.get("msg", ""),
                    "type": error.get("type", ""),
                }
            )
        first_loc = exc.errors()[0].get("loc", ()) if exc.errors() else ()
        field = str(first_loc[-1]) if first_loc else None
        return _error_response(
            400,
            ErrorResponse(detail="Invalid request", code="validation_error", field=field, errors=errors),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled request error",
            exc_info=exc,
            extra={"service": SERVICE_NAME, "run_id": run_id, "path": request.url.path},
        )
        return _error_response(500, ErrorResponse(detail=INTERNAL_ERROR_DETAIL, code="internal_error"))


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
