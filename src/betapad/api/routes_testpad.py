"""Routes for testpad views, exports and per-step results"""

import logging
from typing import Iterator
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from betapad.api.schemas import (
    ResultRowDto,
    SetResultRequest,
    StoredResultDto,
    TestpadDto,
    TestpadRowDto,
)
from betapad.core.export import build_export_template
from betapad.core.linkify import linkify_text, segments_to_dicts
from betapad.core.pipeline import load_view
from betapad.crud.database import session_scope
from betapad.crud.models import ResultEnum
from betapad.crud.resources import ResourceNotFoundError
from betapad.crud.results import list_results, set_result


router = APIRouter(prefix="/api", tags=["testpad"])
logger = logging.getLogger(__name__)


def get_session(request: Request) -> Iterator[Session]:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database is not initialized")
    yield from session_scope(engine)


def _parse_uuid(value: str | None, field: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} must be a UUID")


def _require_user(user_id: str | None) -> str:
    # Identity is supplied by the caller; authentication happens upstream.
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


def _parse_step_index(value) -> int | None:
    """Integral step index from a JSON number or numeric string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _load_view(session: Session, resource_id: UUID):
    try:
        return load_view(session, resource_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/testpad-results", response_model=list[StoredResultDto])
def get_results(
    resource_id: str | None = Query(default=None, alias="resourceId"),
    user_id: str | None = Query(default=None, alias="userId"),
    session: Session = Depends(get_session),
) -> list[StoredResultDto]:
    """Stored results for one user and resource, ordered by step_index."""
    user = _require_user(user_id)
    if not resource_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="resourceId is required")
    rows = list_results(session, user, _parse_uuid(resource_id, "resourceId"))
    return [StoredResultDto(step_index=r.step_index, result=r.result) for r in rows]


@router.post("/testpad-results")
def post_result(body: SetResultRequest, session: Session = Depends(get_session)):
    """Upsert one step result; a null result deletes it."""
    user = _require_user(body.user_id)
    step_index = _parse_step_index(body.step_index)
    if not body.resource_id or step_index is None or step_index < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="resourceId and stepIndex are required",
        )
    if body.result is not None and body.result not in {v.value for v in ResultEnum}:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid result")

    resource_id = _parse_uuid(body.resource_id, "resourceId")
    try:
        row = set_result(session, user, resource_id, step_index, body.result)
    except ResourceNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    session.commit()
    logger.debug("Result %s stored for %s step %d", body.result, resource_id, step_index)

    if row is None:
        return {"success": True}
    return ResultRowDto(
        user_id=row.user_id, resource_id=row.resource_id, step_index=row.step_index, result=row.result,
    )


@router.get("/resources/{resource_id}/testpad", response_model=TestpadDto)
def get_testpad(resource_id: UUID, session: Session = Depends(get_session)) -> TestpadDto:
    """Parsed, classified and linkified testpad for rendering."""
    view = _load_view(session, resource_id)
    return TestpadDto(
        resource_id=resource_id,
        name=view.parsed.name,
        title=view.title,
        description=view.parsed.description,
        description_segments=segments_to_dicts(view.description),
        rows=[
            TestpadRowDto(**row.model_dump(), segments=segments_to_dicts(linkify_text(row.text)))
            for row in view.rows
        ],
    )


@router.get("/resources/{resource_id}/export", response_class=PlainTextResponse)
def get_export(resource_id: UUID, request: Request, session: Session = Depends(get_session)) -> str:
    """Tab-separated spreadsheet template for the testpad."""
    view = _load_view(session, resource_id)
    settings = getattr(request.app.state, "settings", None)
    indent_unit = settings.indent_unit if settings else "  "
    return build_export_template(view.rows, indent_unit)
