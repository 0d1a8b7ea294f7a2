"""Progress listeners for legacy migration runs."""

from __future__ import annotations

import queue
from typing import Protocol

from churchadmin.core.logging import get_logger
from churchadmin.schemas.migration_models import MigrationProgress

logger = get_logger("churchadmin.services.progress")


class ProgressListener(Protocol):
    """Receives detached snapshots of every collection's progress."""

    def __call__(self, collections: list[MigrationProgress]) -> None:
        ...


class LoggingProgressListener:
    """Writes each snapshot to the log."""

    def __call__(self, collections: list[MigrationProgress]) -> None:
        for progress in collections:
            logger.debug(
                f"{progress.collection}: {progress.status.value} "
                f"{progress.processed}/{progress.total} ({progress.errors} errors)"
            )


class QueueProgressListener:
    """Pushes snapshots into a queue drained by another thread."""

    def __init__(self, snapshots: queue.Queue | None = None) -> None:
        self.snapshots: queue.Queue = snapshots if snapshots is not None else queue.Queue()

    def __call__(self, collections: list[MigrationProgress]) -> None:
        self.snapshots.put(collections)
