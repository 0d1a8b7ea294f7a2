"""
Per-collection legacy migration.

Each legacy record is transformed, matched against existing documents by its
natural key, then merged or inserted. A failing record is counted and
reported but never stops the collection.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from churchadmin.core.logging import get_logger
from churchadmin.repositories.document_store import DocumentStore
from churchadmin.schemas.entities import FirestoreModel
from churchadmin.schemas.migration_models import MigrationProgress, MigrationStatus
from churchadmin.services.identity_resolver import IdentityResolver
from churchadmin.services.record_transformer import (
    display_name,
    transform_assistido,
    transform_event,
    transform_member,
)

logger = get_logger("churchadmin.services.collection_migrator")

PROGRESS_INTERVAL = 5


@dataclass(frozen=True)
class MigrationTarget:
    """How one legacy collection maps onto a target collection."""

    source: str
    collection: str
    kind: str
    natural_key: Optional[str]
    transform: Callable[[Any, datetime], FirestoreModel]
    name_field: str = "nomeCompleto"


MIGRATION_TARGETS: dict[str, MigrationTarget] = {
    "assistidos": MigrationTarget(
        source="assistidos",
        collection="assistidos",
        kind="assistido",
        natural_key="cpf",
        transform=transform_assistido,
    ),
    "membros": MigrationTarget(
        source="membros",
        collection="members",
        kind="member",
        natural_key="email",
        transform=transform_member,
    ),
    "eventos": MigrationTarget(
        source="eventos",
        collection="events",
        kind="event",
        natural_key=None,
        transform=transform_event,
        name_field="nome",
    ),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CollectionMigrator:
    """Migrates a single legacy collection into its target collection."""

    def __init__(
        self,
        store: DocumentStore,
        target: MigrationTarget,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.target = target
        self.resolver = IdentityResolver(store)
        self.clock = clock or utc_now

    def migrate(
        self,
        records: Mapping[str, Any],
        progress: MigrationProgress,
        on_progress: Callable[[MigrationProgress], None] | None = None,
    ) -> None:
        """
        Migrate every record in insertion order, updating ``progress`` in place.

        Args:
            records: Legacy ID -> legacy record
            progress: Progress record owned by this migration
            on_progress: Called with a snapshot every PROGRESS_INTERVAL
                successful records and once on completion
        """
        new_records = 0
        updated_records = 0

        for legacy_id, raw in records.items():
            try:
                if self._migrate_record(raw):
                    updated_records += 1
                else:
                    new_records += 1
            except Exception as e:
                progress.processed += 1
                progress.errors += 1
                name = display_name(raw, self.target.name_field)
                progress.error_messages.append(f"Failed to migrate {self.target.kind} {name}: {e}")
                logger.warning(f"Failed to migrate {self.target.source}/{legacy_id} ({name}): {e}")
                continue

            progress.processed += 1
            if on_progress and progress.processed % PROGRESS_INTERVAL == 0:
                on_progress(progress.snapshot())

        progress.status = MigrationStatus.COMPLETED
        summary = f"New: {new_records}, Updated: {updated_records}, Errors: {progress.errors}"
        progress.error_messages.insert(0, summary)
        logger.info(f"Migrated {self.target.source} -> {self.target.collection}: {summary}")

        if on_progress:
            on_progress(progress.snapshot())

    def _migrate_record(self, raw: Any) -> bool:
        """Write one record. Returns True when an existing document was merged."""
        document = self.target.transform(raw, self.clock()).to_document()
        existing_id = self.resolver.resolve(self.target.collection, self.target.natural_key, document)

        if existing_id:
            self.store.merge_upsert(
                self.target.collection,
                existing_id,
                {**document, "updatedAt": self.clock()},
            )
            return True

        self.store.insert(self.target.collection, document)
        return False
