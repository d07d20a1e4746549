"""Per-step result state: pure toggle logic plus an optimistic tracker with injected persistence"""

import logging
from typing import Callable, Mapping, Optional

from betapad.core.models import ClassifiedRow, RowKind
from betapad.crud.models import ResultEnum


logger = logging.getLogger(__name__)

ResultMap = dict[int, ResultEnum]
PersistFn = Callable[[int, Optional[ResultEnum]], None]


def toggle_result(
    results: Mapping[int, ResultEnum],
    index: int,
    value: ResultEnum,
    ) -> tuple[ResultMap, Optional[ResultEnum]]:
    """Return (new_results, next_value); choosing the current value clears it.

    The input mapping is left untouched.
    """
    value = ResultEnum(value)
    next_value = None if results.get(index) == value else value
    new_results = dict(results)
    if next_value is None:
        new_results.pop(index, None)
    else:
        new_results[index] = next_value
    return new_results, next_value


class ResultTracker:
    """Current results for one (user, resource) pair over a classified row list.

    Toggles update local state first, then call persist(index, value); a failing
    persist is logged and local state is kept (a reload re-syncs from the store).
    """

    def __init__(
        self,
        rows: list[ClassifiedRow],
        persist: PersistFn,
        initial: Mapping[int, ResultEnum] | None = None,
        ):
        self.rows = rows
        self.persist = persist
        self.results: ResultMap = {
            i: ResultEnum(v) for i, v in (initial or {}).items() if self._gradeable(i)
        }

    def _gradeable(self, index: int) -> bool:
        return 0 <= index < len(self.rows) and self.rows[index].kind == RowKind.step

    def get(self, index: int) -> Optional[ResultEnum]:
        return self.results.get(index)

    def toggle(self, index: int, value: ResultEnum) -> Optional[ResultEnum]:
        """Toggle value on row index and persist. Raises ValueError for non-step rows."""
        if not self._gradeable(index):
            raise ValueError(f"Row {index} is not a gradeable step")
        self.results, next_value = toggle_result(self.results, index, value)
        try:
            self.persist(index, next_value)
        except Exception:
            logger.warning("Failed to save result for step %d", index, exc_info=True)
        return next_value

    def summary(self) -> dict[str, int]:
        """Counts of pass/fail/blocked plus untested gradeable steps."""
        counts = {v.value: 0 for v in ResultEnum}
        for v in self.results.values():
            counts[v.value] += 1
        total = sum(1 for r in self.rows if r.kind == RowKind.step)
        counts["untested"] = total - len(self.results)
        return counts
