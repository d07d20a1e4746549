"""File discovery and CSV-dialect record/field splitting for testpad exports"""

import logging
import re
from pathlib import Path


logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r'\r?\n')
RESOURCE_EXTENSIONS = {'.csv', '.txt'}


def _count_quotes(line: str) -> int:
    """Count quote characters in line, treating '""' as one escaped quote (not a toggle)."""
    quotes = 0
    i = 0
    while i < len(line):
        if line[i] == '"':
            if i + 1 < len(line) and line[i + 1] == '"':
                i += 1
            else:
                quotes += 1
        i += 1
    return quotes


def split_records(content: str) -> list[str]:
    """Split raw text into logical CSV records.

    A quoted field may span physical lines; those lines are joined back with
    '\\n' into a single record. Blank lines produce empty records. A record left
    open by a dangling quote at end of input is still returned.
    """
    if not content:
        return []

    records: list[str] = []
    pending = ""
    open_quote = False

    for line in LINE_BREAK_RE.split(content):
        pending = f"{pending}\n{line}" if open_quote else line
        if _count_quotes(line) % 2 == 1:
            open_quote = not open_quote
        if not open_quote:
            records.append(pending)
            pending = ""

    if pending:
        logger.debug("Unterminated quoted field at end of input; keeping partial record")
        records.append(pending)
    return records


def parse_csv_line(record: str) -> list[str]:
    """Split one logical record into fields, resolving quotes and '""' escapes."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(record):
        char = record[i]
        if char == '"':
            if in_quotes and record[i + 1:i + 2] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current))
    return fields


def discover_files(path: Path, extensions: set[str] = None) -> list[Path]:
    """Return sorted resource files under path, or [path] if a single matching file."""
    extensions = extensions or RESOURCE_EXTENSIONS
    if path.is_file():
        return [path] if path.suffix.lower() in extensions else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in extensions)


def read_file(path: Path) -> str:
    """Read a resource file as text; a UTF-8 BOM from spreadsheet exports is dropped."""
    return path.read_text(encoding='utf-8-sig')
