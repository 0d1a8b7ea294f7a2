"""Unit tests for per-collection migration."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from churchadmin.schemas.migration_models import MigrationProgress, MigrationStatus
from churchadmin.services.collection_migrator import (
    MIGRATION_TARGETS,
    PROGRESS_INTERVAL,
    CollectionMigrator,
)


def _assistidos(count: int) -> dict[str, Any]:
    return {f"-A{i}": {"nomeCompleto": f"Pessoa {i}", "cpf": str(i)} for i in range(count)}


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock()
    store.find_one_by_field.return_value = None
    store.insert.return_value = "new-id"
    return store


class TestCollectionMigrator:
    """Tests for CollectionMigrator.migrate."""

    def test_new_records_are_inserted(self, mock_store, clock):
        progress = MigrationProgress(collection="assistidos", total=3)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(_assistidos(3), progress)

        assert mock_store.insert.call_count == 3
        mock_store.merge_upsert.assert_not_called()
        assert progress.processed == 3
        assert progress.errors == 0
        assert progress.status == MigrationStatus.COMPLETED
        assert progress.error_messages == ["New: 3, Updated: 0, Errors: 0"]

    def test_cpf_match_merges(self, mock_store, clock, ana_record, fixed_now):
        mock_store.find_one_by_field.return_value = "existing-ana"
        progress = MigrationProgress(collection="assistidos", total=1)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate({"-A1": ana_record}, progress)

        mock_store.insert.assert_not_called()
        collection, doc_id, partial = mock_store.merge_upsert.call_args.args
        assert (collection, doc_id) == ("assistidos", "existing-ana")
        assert partial["nome"] == "Ana"
        assert partial["updatedAt"] == fixed_now
        assert progress.error_messages[0] == "New: 0, Updated: 1, Errors: 0"

    def test_empty_cpf_inserts(self, mock_store, clock):
        progress = MigrationProgress(collection="assistidos", total=1)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate({"-A1": {"nomeCompleto": "Sem CPF", "cpf": ""}}, progress)

        mock_store.find_one_by_field.assert_not_called()
        mock_store.insert.assert_called_once()

    def test_members_match_on_email(self, mock_store, clock, member_record):
        progress = MigrationProgress(collection="membros", total=1)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["membros"], clock=clock)

        migrator.migrate({"-M1": member_record}, progress)

        mock_store.find_one_by_field.assert_called_once_with("members", "email", "joao@example.com")
        assert mock_store.insert.call_args.args[0] == "members"

    def test_events_always_insert(self, mock_store, clock, event_record):
        mock_store.find_one_by_field.return_value = "should-not-be-used"
        progress = MigrationProgress(collection="eventos", total=2)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["eventos"], clock=clock)

        migrator.migrate({"-E1": event_record, "-E2": event_record}, progress)

        mock_store.find_one_by_field.assert_not_called()
        assert mock_store.insert.call_count == 2
        assert progress.error_messages == ["New: 2, Updated: 0, Errors: 0"]

    def test_failing_record_does_not_stop_collection(self, mock_store, clock):
        def insert(collection, document):
            if document["nome"] == "Pessoa 2":
                raise RuntimeError("write rejected")
            return "new-id"

        mock_store.insert.side_effect = insert
        records = _assistidos(5)
        progress = MigrationProgress(collection="assistidos", total=len(records))
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(records, progress)

        assert progress.processed == 5
        assert progress.errors == 1
        assert progress.error_messages == [
            "New: 4, Updated: 0, Errors: 1",
            "Failed to migrate assistido Pessoa 2: write rejected",
        ]
        assert mock_store.insert.call_count == 5

    def test_lookup_failure_counts_as_record_error(self, mock_store, clock):
        mock_store.find_one_by_field.side_effect = RuntimeError("quota exceeded")
        progress = MigrationProgress(collection="assistidos", total=2)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(_assistidos(2), progress)

        assert progress.processed == 2
        assert progress.errors == 2
        mock_store.insert.assert_not_called()

    def test_records_processed_in_order(self, mock_store, clock):
        records = {"-Z": {"nomeCompleto": "Z", "cpf": "1"}, "-A": {"nomeCompleto": "A", "cpf": "2"}}
        progress = MigrationProgress(collection="assistidos", total=2)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(records, progress)

        names = [call.args[1]["nome"] for call in mock_store.insert.call_args_list]
        assert names == ["Z", "A"]


class TestProgressCallback:
    """Tests for progress snapshot emission."""

    def test_snapshot_every_interval_and_on_completion(self, mock_store, clock):
        snapshots: list[MigrationProgress] = []
        records = _assistidos(12)
        progress = MigrationProgress(collection="assistidos", total=len(records))
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(records, progress, on_progress=snapshots.append)

        assert [s.processed for s in snapshots] == [PROGRESS_INTERVAL, 2 * PROGRESS_INTERVAL, 12]
        assert snapshots[-1].status == MigrationStatus.COMPLETED

    def test_snapshots_are_detached(self, mock_store, clock):
        snapshots: list[MigrationProgress] = []
        progress = MigrationProgress(collection="assistidos", total=5)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate(_assistidos(5), progress, on_progress=snapshots.append)

        assert snapshots[0] is not progress
        assert snapshots[0].error_messages == []
        assert progress.error_messages != []

    def test_empty_collection_reports_once(self, mock_store, clock):
        snapshots: list[MigrationProgress] = []
        progress = MigrationProgress(collection="assistidos", total=0)
        migrator = CollectionMigrator(mock_store, MIGRATION_TARGETS["assistidos"], clock=clock)

        migrator.migrate({}, progress, on_progress=snapshots.append)

        assert len(snapshots) == 1
        assert snapshots[0].error_messages == ["New: 0, Updated: 0, Errors: 0"]
