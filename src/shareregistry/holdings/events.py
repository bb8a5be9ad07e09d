from __future__ import annotations

from typing import List

from .domain import SkippedTransaction


class EventRecorder:
    """Collect transactions left out of the holdings summary without side effects."""

    def __init__(self) -> None:
        self._skipped: List[SkippedTransaction] = []

    def record_skip(self, event: SkippedTransaction) -> None:
        self._skipped.append(event)

    @property
    def skipped(self) -> list[SkippedTransaction]:
        return self._skipped
