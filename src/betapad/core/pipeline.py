"""Pipeline step functions: parse, import, view and export orchestration"""

import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from sqlmodel import Session

from betapad.core.export import INDENT_UNIT, write_template
from betapad.core.extract.classify import classify_steps
from betapad.core.extract.script import parse_testpad
from betapad.core.linkify import linkify_multiline
from betapad.core.models import ClassifiedRow, ParsedTestpad, Segment
from betapad.core.parse import discover_files, read_file
from betapad.core.utils.slug import slugify
from betapad.crud.models import Resource, ResourceTypeEnum
from betapad.crud.resources import require_resource, upsert_resource


logger = logging.getLogger(__name__)


@dataclass
class TestpadView:
    """Everything needed to render one testpad resource; rebuilt on every request."""

    resource:     Resource | None
    parsed:       ParsedTestpad
    rows:         list[ClassifiedRow]
    description:  list[Segment]

    @property
    def title(self) -> str:
        return self.parsed.name or (self.resource.name if self.resource else "") or "Testpad"


def build_view(content: str | None, resource: Resource | None = None) -> TestpadView:
    """Parse and classify raw content; empty content yields an empty view."""
    parsed = parse_testpad(content or "")
    rows = classify_steps(parsed.steps)
    description = linkify_multiline(parsed.description) if parsed.description else []
    return TestpadView(resource=resource, parsed=parsed, rows=rows, description=description)


def load_view(session: Session, ref: UUID | str) -> TestpadView:
    """Build the view for a stored testpad resource. Raises ResourceNotFoundError or ValueError."""
    resource = require_resource(session, ref)
    if resource.type != ResourceTypeEnum.testpad:
        raise ValueError(f"Resource {resource.slug} is a {resource.type.value} resource, not a testpad")
    return build_view(resource.content, resource)


def run_parse(path: Path) -> TestpadView:
    """Parse a testpad file from disk."""
    view = build_view(read_file(path))
    logger.debug("Parsed %s: %d row(s)", path, len(view.rows))
    return view


def run_export(path: Path, dest: Path, indent_unit: str = INDENT_UNIT) -> tuple[TestpadView, Path]:
    """Parse path and write its spreadsheet template to dest."""
    view = run_parse(path)
    return view, write_template(view.rows, dest, indent_unit)


def run_import(
    session: Session,
    path: Path,
    extensions: set[str] | None = None,
    type: ResourceTypeEnum = ResourceTypeEnum.testpad,
    name: str | None = None,
    ) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Upsert every resource file under path. Returns (counts, changes).

    changes lists (status, slug) for created/updated resources. name applies
    only when path is a single file. Caller commits the session.
    """
    files = discover_files(path, extensions)
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    changes = []
    for f in files:
        try:
            content = read_file(f)
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to read {f}: {e}") from e
        parsed_name = ""
        if type == ResourceTypeEnum.testpad:
            parsed = parse_testpad(content)
            parsed_name = parsed.name
            if not parsed.steps:
                logger.warning("%s has no step table; importing anyway", f)
        label = name if name and len(files) == 1 else (parsed_name or f.stem)
        resource, status = upsert_resource(
            session, slugify(f.stem), label, content, type=type, path=str(f),
        )
        counts[status] += 1
        if status != 'unchanged':
            changes.append((status, resource.slug))
    return counts, changes
