from __future__ import annotations

import math
from typing import Optional

from .constants import PROGRESS_INTERVAL
from .models import OperationKind, ProgressCallback, ProgressInfo


def percentage(processed: int, total: int) -> int:
    """Whole percent, rounded half up; 0 when there is nothing to process."""
    if total <= 0:
        return 0
    return int(math.floor(processed * 100 / total + 0.5))


class ProgressReporter:
    """Throttled progress for one build/extract call.

    ``advance`` notifies the callback on every ``interval``-th processed file;
    ``finish`` always emits a terminal 100% event. The callback runs inline,
    so it must not block and anything it raises reaches the caller.
    """

    def __init__(
        self,
        operation: OperationKind,
        total_count: int,
        total_bytes: int,
        callback: Optional[ProgressCallback] = None,
        interval: int = PROGRESS_INTERVAL,
    ):
        self.operation = operation
        self.total_count = total_count
        self.total_bytes = total_bytes
        self.callback = callback
        self.interval = max(1, interval)
        self.processed_count = 0
        self.processed_bytes = 0

    def advance(self, path: str, size: int) -> None:
        self.processed_count += 1
        self.processed_bytes += size
        if self.callback is not None and self.processed_count % self.interval == 0:
            self.callback(
                ProgressInfo(
                    operation=self.operation,
                    current_path=path,
                    processed_count=self.processed_count,
                    total_count=self.total_count,
                    processed_bytes=self.processed_bytes,
                    total_bytes=self.total_bytes,
                    percentage=percentage(self.processed_count, self.total_count),
                )
            )

    def finish(self) -> None:
        if self.callback is None:
            return
        self.callback(
            ProgressInfo(
                operation=self.operation,
                current_path="",
                processed_count=self.total_count,
                total_count=self.total_count,
                processed_bytes=self.total_bytes,
                total_bytes=self.total_bytes,
                percentage=100,
            )
        )
