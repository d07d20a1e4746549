"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from betapad.core.utils.hashing import sha256
from betapad.crud.models import Resource, ResourceTypeEnum


PAD = "SCRIPT\nName,Login\nnumber,indent,text\n1,0,Open app\n2,0,Sign in\n"


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="resource")
def resource_fixture(session):
    """A minimal testpad Resource persisted to the session."""
    r = Resource(slug="login", name="Login", type=ResourceTypeEnum.testpad,
                 content=PAD, hash=sha256(PAD), path="pads/login.csv")
    session.add(r)
    session.flush()
    return r
