"""Row classification: category headers, comments and gradeable steps"""

from betapad.core.models import ClassifiedRow, RowKind, TestpadStep


COMMENT_PREFIXES = ("//", "--")


def classify_step(step: TestpadStep, next_step: TestpadStep | None) -> RowKind:
    """Kind of a row given only its own text and its successor's indent."""
    if next_step is not None and next_step.indent > step.indent:
        return RowKind.category
    if step.text.strip().startswith(COMMENT_PREFIXES):
        return RowKind.comment
    return RowKind.step


def classify_steps(steps: list[TestpadStep]) -> list[ClassifiedRow]:
    """Classify each step with a single forward lookahead; output matches input length and order."""
    successors = list(steps[1:]) + [None]
    return [
        ClassifiedRow(**step.model_dump(), kind=classify_step(step, nxt))
        for step, nxt in zip(steps, successors)
    ]
