"""
Legacy Export Importer

Command line access to the legacy migration engine.

Usage:
    churchadmin-import validate export.json
    churchadmin-import preview export.json
    churchadmin-import migrate export.json --store local --data-dir ./data --report result.json
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from churchadmin.core.exceptions import MigrationError, PayloadError
from churchadmin.repositories.document_store import DocumentStore
from churchadmin.repositories.firestore_store import FirestoreDocumentStore
from churchadmin.repositories.local_store import LocalDocumentStore
from churchadmin.schemas.migration_models import MigrationProgress
from churchadmin.services.migration_service import MigrationService
from churchadmin.services.payload_validator import (
    parse_legacy_export,
    preview_legacy_payload,
    validate_legacy_payload,
)


def load_export(path: Path) -> Any:
    """Read and decode an export file. Raises PayloadError when it cannot be read."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise PayloadError(f"Could not read file: {e}") from e
    return parse_legacy_export(raw)


def build_store(kind: str, data_dir: Optional[Path] = None) -> DocumentStore:
    if kind == "local":
        return LocalDocumentStore(data_dir)
    return FirestoreDocumentStore()


def print_progress(collections: list[MigrationProgress]) -> None:
    for progress in collections:
        print(
            f"  {progress.collection:<12} {progress.status.value:<10} "
            f"{progress.processed}/{progress.total}  errors: {progress.errors}"
        )
    print()


def cmd_validate(path: Path) -> int:
    """Validate an export file."""
    try:
        data = load_export(path)
    except PayloadError as e:
        print(f"✗ {e.message}")
        return 1

    validation = validate_legacy_payload(data)
    if not validation.valid:
        for error in validation.errors:
            print(f"✗ {error}")
        return 1

    print(f"✓ {path.name} is a valid legacy export")
    return 0


def cmd_preview(path: Path) -> int:
    """Show the records a migration would process."""
    try:
        preview = preview_legacy_payload(load_export(path))
    except PayloadError as e:
        print(f"✗ {e.message}")
        return 1

    if not preview.collections:
        print("No legacy collections found.")
    for collection, count in preview.collections.items():
        print(f"  {collection:<12} {count} record(s)")
    if preview.ignored:
        print(f"\nIgnored keys: {', '.join(preview.ignored)}")
    return 0


def cmd_migrate(
    path: Path,
    store_kind: str,
    data_dir: Optional[Path] = None,
    report: Optional[Path] = None,
) -> int:
    """Migrate an export file into the selected store."""
    if cmd_validate(path) != 0:
        return 1

    service = MigrationService(build_store(store_kind, data_dir))
    print(f"\nMigrating {path.name} into {store_kind} store:\n")

    try:
        result = service.migrate(load_export(path), listener=print_progress)
    except MigrationError as e:
        print(f"✗ {e.message}")
        return 1

    for progress in result.collections:
        print(f"{progress.collection}:")
        for message in progress.error_messages:
            print(f"  {message}")

    print(
        f"\nMigrated {result.migrated_records}/{result.total_records} records "
        f"({result.errors} errors) in {result.duration} ms."
    )

    if report:
        report.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        print(f"Report written to {report}")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Legacy export importer")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    validate_parser = subparsers.add_parser("validate", help="Validate an export file")
    validate_parser.add_argument("file", type=Path, help="Legacy JSON export")

    preview_parser = subparsers.add_parser("preview", help="Count records per collection")
    preview_parser.add_argument("file", type=Path, help="Legacy JSON export")

    migrate_parser = subparsers.add_parser("migrate", help="Run the migration")
    migrate_parser.add_argument("file", type=Path, help="Legacy JSON export")
    migrate_parser.add_argument(
        "--store",
        choices=["firestore", "local"],
        default="firestore",
        help="Target document store (default: firestore)",
    )
    migrate_parser.add_argument("--data-dir", type=Path, help="Root directory of the local store")
    migrate_parser.add_argument("--report", type=Path, help="Write the migration result as JSON")

    args = parser.parse_args(argv)

    if args.command == "validate":
        return cmd_validate(args.file)
    elif args.command == "preview":
        return cmd_preview(args.file)
    elif args.command == "migrate":
        return cmd_migrate(args.file, args.store, args.data_dir, args.report)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
