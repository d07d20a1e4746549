"""Inline link rendering: markdown-style and bare http(s) links into typed segments"""

import re
from html import escape

from betapad.core.models import LineBreak, LinkSegment, Segment, TextSegment
from betapad.core.parse import LINE_BREAK_RE


MARKDOWN_LINK_RE = re.compile(r'\[([^\]]+)\]\((https?://[^)]+)\)')
BARE_URL_RE = re.compile(r'(https?://\S+)')


def _linkify_urls(text: str) -> list[Segment]:
    """Split text on bare http(s) URLs; trailing punctuation stays part of the URL."""
    segments: list[Segment] = []
    for i, part in enumerate(BARE_URL_RE.split(text)):
        if not part:
            continue
        # re.split with one group puts matches at odd indices
        if i % 2 == 1:
            segments.append(LinkSegment(label=part, url=part, source=part))
        else:
            segments.append(TextSegment(part))
    return segments


def linkify_text(text: str) -> list[Segment]:
    """Convert one line of text into text and link segments covering it exactly."""
    segments: list[Segment] = []
    last = 0
    for m in MARKDOWN_LINK_RE.finditer(text):
        if m.start() > last:
            segments.extend(_linkify_urls(text[last:m.start()]))
        segments.append(LinkSegment(label=m.group(1), url=m.group(2), source=m.group(0)))
        last = m.end()
    if last < len(text):
        segments.extend(_linkify_urls(text[last:]))
    return segments


def linkify_multiline(text: str) -> list[Segment]:
    """Linkify each line separately, with a LineBreak between consecutive lines."""
    segments: list[Segment] = []
    lines = LINE_BREAK_RE.split(text)
    for i, line in enumerate(lines):
        segments.extend(linkify_text(line))
        if i < len(lines) - 1:
            segments.append(LineBreak())
    return segments


def segments_to_source(segments: list[Segment]) -> str:
    """Rebuild the original text (line breaks normalised to '\\n')."""
    parts = []
    for s in segments:
        if isinstance(s, LineBreak):
            parts.append("\n")
        elif isinstance(s, LinkSegment):
            parts.append(s.source)
        else:
            parts.append(s.text)
    return "".join(parts)


def segments_to_text(segments: list[Segment]) -> str:
    """Displayed text: link labels in place of markdown link syntax."""
    parts = []
    for s in segments:
        if isinstance(s, LineBreak):
            parts.append("\n")
        elif isinstance(s, LinkSegment):
            parts.append(s.label)
        else:
            parts.append(s.text)
    return "".join(parts)


def render_html(segments: list[Segment]) -> str:
    """Escaped HTML with anchors opening in a new tab and <br /> for line breaks."""
    parts = []
    for s in segments:
        if isinstance(s, LineBreak):
            parts.append("<br />")
        elif isinstance(s, LinkSegment):
            parts.append(
                f'<a href="{escape(s.url)}" target="_blank" rel="noreferrer">{escape(s.label)}</a>'
            )
        else:
            parts.append(escape(s.text))
    return "".join(parts)


def segments_to_dicts(segments: list[Segment]) -> list[dict]:
    """JSON-friendly form used by the API and the CLI --json output."""
    out = []
    for s in segments:
        if isinstance(s, LineBreak):
            out.append({"type": "break"})
        elif isinstance(s, LinkSegment):
            out.append({"type": "link", "label": s.label, "url": s.url})
        else:
            out.append({"type": "text", "text": s.text})
    return out
