"""Resource persistence: upsert by path, slug/id lookup, content access"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Session, select

from betapad.core.utils.hashing import sha256
from betapad.crud.models import Resource, ResourceTypeEnum, TestpadResult


class ResourceNotFoundError(LookupError):
    """Raised when a resource id or slug does not exist."""


def get_by_id(session: Session, resource_id: UUID) -> Resource | None:
    """Return the Resource with the given id, or None if not found."""
    return session.get(Resource, resource_id)


def get_by_path(session: Session, path: str) -> Resource | None:
    """Return the Resource imported from the given source path, or None if not found."""
    return session.exec(select(Resource).where(Resource.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str) -> Resource | None:
    """Return the Resource with the given slug, or None if not found."""
    return session.exec(select(Resource).where(Resource.slug == slug)).one_or_none()


def require_resource(session: Session, ref: UUID | str) -> Resource:
    """Look up a resource by UUID or slug. Raises ResourceNotFoundError if missing."""
    resource = get_by_id(session, ref) if isinstance(ref, UUID) else get_by_slug(session, ref)
    if resource is None:
        raise ResourceNotFoundError(f"Resource not found: {ref}")
    return resource


def list_resources(session: Session, type: ResourceTypeEnum | None = None) -> list[Resource]:
    """Return resources ordered by creation time, optionally filtered by type."""
    stmt = select(Resource).order_by(Resource.created_at.asc())
    if type is not None:
        stmt = stmt.where(Resource.type == type)
    return list(session.exec(stmt).all())


def get_resource_content(session: Session, resource_id: UUID) -> tuple[ResourceTypeEnum, str | None]:
    """Return (type, content) for a resource. Raises ResourceNotFoundError if missing."""
    resource = require_resource(session, resource_id)
    return resource.type, resource.content


def unique_slug(session: Session, slug: str) -> str:
    """Return slug, or slug-2, slug-3, ... when it is already taken."""
    candidate, n = slug, 1
    while get_by_slug(session, candidate) is not None:
        n += 1
        candidate = f"{slug}-{n}"
    return candidate


def upsert_resource(
    session: Session,
    slug: str,
    name: str,
    content: str | None,
    type: ResourceTypeEnum = ResourceTypeEnum.testpad,
    path: str | None = None,
    ) -> tuple[Resource, str]:
    """Create or update a resource keyed by path (or slug when no path is given).

    New resources whose slug is taken get a numeric suffix; existing
    resources keep their slug.
    Returns (resource, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    Existing results are kept on update; step_index stays meaningful only while
    the step table is unchanged.
    """
    content_hash = sha256(content or "")
    resource = get_by_path(session, path) if path else get_by_slug(session, slug)

    if resource:
        if resource.hash == content_hash and resource.name == name and resource.type == type:
            return resource, 'unchanged'
        resource.name = name
        resource.type = type
        resource.content = content
        resource.hash = content_hash
        resource.updated_at = datetime.now()
        session.add(resource)
        session.flush()
        return resource, 'updated'

    resource = Resource(
        slug=unique_slug(session, slug), name=name, type=type,
        content=content, hash=content_hash, path=path,
    )
    session.add(resource)
    session.flush()
    return resource, 'created'


def delete_resource(session: Session, resource_id: UUID) -> None:
    """Delete a resource and all results recorded against it. Flushes, does not commit."""
    resource = require_resource(session, resource_id)
    for row in session.exec(select(TestpadResult).where(TestpadResult.resource_id == resource.id)).all():
        session.delete(row)
    session.delete(resource)
    session.flush()
