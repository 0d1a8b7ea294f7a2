"""
Legacy Migration Service

Entry point for importing a predecessor-system export into Firestore.
Collections are migrated strictly one after another, records strictly in
export order.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from churchadmin.core.exceptions import MigrationError
from churchadmin.core.logging import LogContext, get_logger
from churchadmin.repositories.document_store import DocumentStore
from churchadmin.schemas.migration_models import (
    MigrationProgress,
    MigrationResult,
    MigrationStatus,
    PayloadPreview,
)
from churchadmin.services.collection_migrator import MIGRATION_TARGETS, CollectionMigrator
from churchadmin.services.payload_validator import (
    RECOGNIZED_COLLECTIONS,
    preview_legacy_payload,
    read_legacy_collection,
)
from churchadmin.services.progress import ProgressListener

logger = get_logger("churchadmin.services.migration")


class MigrationService:
    """Runs a legacy export migration against a document store."""

    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.clock = clock

    def preview(self, payload: Any) -> PayloadPreview:
        """Count the records that a run would process, without touching the store."""
        return preview_legacy_payload(payload)

    def migrate(
        self,
        payload: Any,
        listener: ProgressListener | None = None,
    ) -> MigrationResult:
        """
        Migrate every recognized collection present in ``payload``.

        Per-record failures are reported in the result; anything else aborts
        the run.

        Args:
            payload: Parsed legacy export (top-level ``assistidos``,
                ``membros`` and/or ``eventos``)
            listener: Receives the full progress list at each collection
                start, every 5th record and each collection end

        Returns:
            Aggregated migration result

        Raises:
            MigrationError: If the payload cannot be read or the run fails
                outside the per-record guard
        """
        started = time.monotonic()

        try:
            with LogContext(logger, "legacy migration"):
                plan = self._plan(payload)
                collections = [progress for progress, _ in plan]

                def emit() -> None:
                    if listener:
                        listener([progress.snapshot() for progress in collections])

                for progress, records in plan:
                    progress.status = MigrationStatus.PROCESSING
                    emit()

                    target = MIGRATION_TARGETS[progress.collection]
                    migrator = CollectionMigrator(self.store, target, clock=self.clock)
                    with LogContext(logger, "collection migration", collection=target.source, total=progress.total):
                        migrator.migrate(records, progress, on_progress=lambda _: emit())
        except MigrationError:
            raise
        except Exception as e:
            raise MigrationError(f"Migration failed: {e}") from e

        duration = int((time.monotonic() - started) * 1000)
        result = MigrationResult(
            success=True,
            total_records=sum(c.total for c in collections),
            migrated_records=sum(c.processed for c in collections),
            errors=sum(c.errors for c in collections),
            collections=collections,
            duration=duration,
        )
        logger.info(
            f"Migration finished: {result.migrated_records}/{result.total_records} records, "
            f"{result.errors} errors, {duration} ms"
        )
        return result

    def _plan(self, payload: Any) -> list[tuple[MigrationProgress, dict[str, Any]]]:
        """Build a pending progress record for each collection present in the payload."""
        if not isinstance(payload, Mapping):
            raise MigrationError("Legacy payload is not readable", {"type": type(payload).__name__})

        plan = []
        for key in RECOGNIZED_COLLECTIONS:
            records = read_legacy_collection(payload, key)
            if records is None:
                continue
            plan.append((MigrationProgress(collection=key, total=len(records)), records))
        return plan
