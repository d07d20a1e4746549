"""Testpad script extraction: metadata block and step table from logical CSV records"""

import logging
import re

from betapad.core.models import ParsedTestpad, TestpadStep
from betapad.core.parse import parse_csv_line, split_records


logger = logging.getLogger(__name__)

SCRIPT_MARKERS = {"SCRIPT", "TEMPLATE"}
COMMENTS_MARKER = "REPORT COMMENTS"
STEP_HEADER = "number,indent,text"

LEADING_INT_RE = re.compile(r'\s*([+-]?[0-9]+)')


def _parse_indent(value: str) -> int:
    """Leading integer of value (as parseInt reads it); 0 when absent or negative."""
    m = LEADING_INT_RE.match(value)
    if not m:
        return 0
    return max(int(m.group(1)), 0)


def _to_step(fields: list[str]) -> TestpadStep | None:
    """Build a TestpadStep from a step-table row, or None for rows with no step and no text."""
    step = fields[0].strip()
    text = fields[2].strip()
    if not step and not text:
        return None
    return TestpadStep(step=step, indent=_parse_indent(fields[1]), text=text)


def extract_testpad(records: list[str]) -> ParsedTestpad:
    """Single pass over logical records producing name, description and steps.

    Metadata is read only between a SCRIPT/TEMPLATE marker and REPORT COMMENTS.
    The step table starts after the first 'number,indent,text' header found
    anywhere in the input and runs until the next REPORT COMMENTS marker.
    """
    name = ""
    description = ""
    in_script = False
    current_key: str | None = None
    in_table = False
    header_seen = False
    steps: list[TestpadStep] = []

    for record in records:
        trimmed = record.strip()

        if in_table:
            if trimmed == COMMENTS_MARKER:
                in_table = False
            elif trimmed:
                fields = parse_csv_line(record)
                if len(fields) >= 3 and (step := _to_step(fields)):
                    steps.append(step)

        if trimmed in SCRIPT_MARKERS:
            in_script = True
            current_key = None
            continue

        if in_script:
            if trimmed == COMMENTS_MARKER:
                in_script = False
                current_key = None
                continue
            if not trimmed:
                continue

            fields = parse_csv_line(record)
            key = fields[0].strip()
            if key and len(fields) > 1:
                current_key = key
                if key == "Name":
                    name = ",".join(fields[1:]).strip()
                elif key == "Description":
                    description = ",".join(fields[1:]).strip()
            elif current_key == "Description" and "," not in record:
                description = f"{description}\n{record}" if description else record

        if not header_seen and trimmed.lower().startswith(STEP_HEADER):
            logger.debug("Step table header found: %r", trimmed)
            header_seen = True
            in_table = True

    if not header_seen:
        logger.debug("No '%s' header found; testpad has no steps", STEP_HEADER)
    return ParsedTestpad(name=name, description=description, steps=steps)


def parse_testpad(content: str) -> ParsedTestpad:
    """Parse raw testpad export text into a ParsedTestpad. Never raises on malformed input."""
    return extract_testpad(split_records(content or ""))
