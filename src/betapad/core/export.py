"""Export pipeline: build the tab-separated spreadsheet template and write output files"""

from pathlib import Path

from betapad.core.models import ClassifiedRow


EXPORT_HEADER = ["Step", "Text", "Pass", "Fail", "Blocked"]
INDENT_UNIT = "  "


def build_export_row(row: ClassifiedRow, indent_unit: str = INDENT_UNIT) -> list[str]:
    """Cells for one row: label, apostrophe-prefixed indented text, three empty result cells.

    The leading apostrophe keeps spreadsheets from coercing the text to a number or date.
    """
    text = f"'{indent_unit * row.indent}{row.text}"
    return [row.step or "", text, "", "", ""]


def build_export_template(rows: list[ClassifiedRow], indent_unit: str = INDENT_UNIT) -> str:
    """Return the header plus one line per row, tab-separated; row kind does not affect encoding."""
    lines = [EXPORT_HEADER] + [build_export_row(r, indent_unit) for r in rows]
    return "\n".join("\t".join(cells) for cells in lines)


def write_template(
    rows: list[ClassifiedRow],
    dest: Path,
    indent_unit: str = INDENT_UNIT,
    ) -> Path:
    """Write the export template to dest, creating parent directories. Returns dest."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(build_export_template(rows, indent_unit) + "\n", encoding='utf-8')
    return dest
