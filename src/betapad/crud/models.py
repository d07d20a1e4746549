"""Database table definitions for resources and per-step testpad results"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class ResourceTypeEnum(str, Enum):
    """Kinds of content a component resource can hold"""
    markdown = "markdown"
    testpad = "testpad"
    video = "video"


class ResultEnum(str, Enum):
    """Recorded outcome of a single testpad step"""
    passed = "pass"
    fail = "fail"
    blocked = "blocked"


class Resource(SQLModel, table=True):
    """A component resource and the raw content source of truth"""
    __tablename__ = "resources"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., index=True, unique=True, nullable=False)
    name: str = Field(..., nullable=False)
    type: ResourceTypeEnum = Field(default=ResourceTypeEnum.testpad, nullable=False)
    content: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    path: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True, unique=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class TestpadResult(SQLModel, table=True):
    """Result for one step of one testpad for one user; step_index is the parsed step position"""
    __tablename__ = "testpad_results"
    user_id: str = Field(primary_key=True)
    resource_id: UUID = Field(foreign_key="resources.id", primary_key=True)
    step_index: int = Field(primary_key=True, ge=0)
    result: ResultEnum = Field(..., nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
