"""Engine construction, schema creation and session helpers"""

from typing import Iterator

from sqlmodel import Session, SQLModel, create_engine

# Register tables on SQLModel.metadata before create_all
from betapad.crud import models  # noqa: F401


def make_engine(db_url: str):
    """Create an engine; SQLite connections may be shared across the API's worker threads."""
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


def session_scope(engine) -> Iterator[Session]:
    """Yield a session; suitable as a FastAPI dependency."""
    with Session(engine) as session:
        yield session
