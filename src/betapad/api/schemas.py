"""Pydantic request and response schemas for the HTTP API"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from betapad.core.models import RowKind
from betapad.crud.models import ResultEnum


def _to_camel(value: str) -> str:
    """snake_case -> camelCase for JSON request bodies."""
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class ApiBaseModel(BaseModel):
    """Request base: camelCase aliases, snake_case names also accepted."""
    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True)


class SetResultRequest(ApiBaseModel):
    """Body of POST /testpad-results; fields are checked by the route to return 400s."""
    resource_id: Optional[str] = None
    user_id: Optional[str] = None
    step_index: Optional[Any] = None
    result: Optional[str] = None


class StoredResultDto(BaseModel):
    step_index: int
    result: ResultEnum


class ResultRowDto(StoredResultDto):
    user_id: str
    resource_id: UUID


class TestpadRowDto(BaseModel):
    step: str
    indent: int
    text: str
    kind: RowKind
    segments: list[dict] = Field(default_factory=list, description="Linkified text segments")


class TestpadDto(BaseModel):
    resource_id: UUID
    name: str
    title: str
    description: str
    description_segments: list[dict] = Field(default_factory=list)
    rows: list[TestpadRowDto]
