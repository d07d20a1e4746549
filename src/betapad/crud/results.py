"""Testpad result persistence keyed by (user_id, resource_id, step_index)"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Session, select

from betapad.crud.models import ResultEnum, TestpadResult
from betapad.crud.resources import require_resource


def _get(session: Session, user_id: str, resource_id: UUID, step_index: int) -> TestpadResult | None:
    return session.get(TestpadResult, (user_id, resource_id, step_index))


def list_results(session: Session, user_id: str, resource_id: UUID) -> list[TestpadResult]:
    """Return stored result rows ordered by step_index ascending."""
    return list(
        session.exec(
            select(TestpadResult)
            .where(TestpadResult.user_id == user_id)
            .where(TestpadResult.resource_id == resource_id)
            .order_by(TestpadResult.step_index.asc())
        ).all()
    )


def get_stored_results(session: Session, user_id: str, resource_id: UUID) -> dict[int, ResultEnum]:
    """Return {step_index: result} for one user and resource."""
    return {r.step_index: r.result for r in list_results(session, user_id, resource_id)}


def set_result(
    session: Session,
    user_id: str,
    resource_id: UUID,
    step_index: int,
    value: ResultEnum | str | None,
    ) -> TestpadResult | None:
    """Upsert a result, or delete it when value is None (deleting a missing row is a no-op).

    Last write wins. Raises ResourceNotFoundError for an unknown resource and
    ValueError for an invalid value or negative step_index.
    Flushes but does not commit; caller controls the transaction.
    """
    if step_index < 0:
        raise ValueError(f"step_index must be >= 0, got {step_index}")
    result = ResultEnum(value) if value is not None else None
    require_resource(session, resource_id)

    row = _get(session, user_id, resource_id, step_index)
    if result is None:
        if row is not None:
            session.delete(row)
            session.flush()
        return None

    if row is None:
        row = TestpadResult(user_id=user_id, resource_id=resource_id, step_index=step_index, result=result)
    else:
        row.result = result
        row.updated_at = datetime.now()
    session.add(row)
    session.flush()
    return row


def clear_results(session: Session, user_id: str, resource_id: UUID) -> int:
    """Delete all results for one user and resource. Returns count deleted."""
    rows = list_results(session, user_id, resource_id)
    for row in rows:
        session.delete(row)
    session.flush()
    return len(rows)


def make_persist(session: Session, user_id: str, resource_id: UUID):
    """Bind set_result to one (user, resource) pair as a ResultTracker persist callback.

    Each call commits, so every toggle is stored on its own.
    """
    def persist(step_index: int, value: ResultEnum | None) -> None:
        set_result(session, user_id, resource_id, step_index, value)
        session.commit()
    return persist
