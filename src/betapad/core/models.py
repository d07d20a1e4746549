"""Intermediate data models for the testpad parse, classify and render pipeline"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class RowKind(str, Enum):
    """Semantic role of a testpad row; only 'step' rows are gradeable"""
    category = "category"
    comment = "comment"
    step = "step"


class TestpadStep(BaseModel):
    """One row of the step table, in source order."""
    model_config = ConfigDict(frozen=True)

    step: str = ""                  # column 0 label; not guaranteed numeric or unique
    indent: int = Field(default=0, ge=0)
    text: str = ""


class ClassifiedRow(TestpadStep):
    """A TestpadStep with its derived kind; never persisted."""
    kind: RowKind


class ParsedTestpad(BaseModel):
    """Script metadata plus the filtered step list; list position is the result step_index."""
    name: str = ""
    description: str = ""           # continuation lines joined with '\n'
    steps: list[TestpadStep] = []


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class LinkSegment:
    label: str
    url: str
    source: str                     # raw matched span, so segments rebuild the input exactly


@dataclass(frozen=True)
class LineBreak:
    pass


Segment = Union[TextSegment, LinkSegment, LineBreak]
