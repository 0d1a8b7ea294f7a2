"""
Legacy Migration API Routes

Endpoints for validating, previewing and running a migration of the
predecessor system's JSON export.
"""

import json
import os
import threading
from pathlib import Path
from typing import Any, Iterator

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from churchadmin.auth.firebase_auth import FirebaseUser, get_current_user
from churchadmin.core.exceptions import MigrationError, PayloadError, ValidationError
from churchadmin.core.logging import get_logger
from churchadmin.repositories.document_store import DocumentStore
from churchadmin.repositories.firestore_store import FirestoreDocumentStore
from churchadmin.repositories.local_store import LocalDocumentStore
from churchadmin.schemas.migration_models import MigrationResult, PayloadPreview, PayloadValidation
from churchadmin.services.migration_service import MigrationService
from churchadmin.services.payload_validator import (
    ensure_valid_payload,
    parse_legacy_export,
    validate_legacy_payload,
)
from churchadmin.services.progress import LoggingProgressListener, QueueProgressListener

logger = get_logger("churchadmin.api.migration")

router = APIRouter(tags=["migration"])

# Lazy initialization to avoid Firebase connection at import time (breaks tests)
_store: DocumentStore | None = None


def get_store() -> DocumentStore:
    global _store
    if _store is None:
        backend = os.environ.get("DOCUMENT_STORE", "firestore").lower()
        if backend == "local":
            data_dir = os.environ.get("LOCAL_DATA_DIR")
            _store = LocalDocumentStore(Path(data_dir) if data_dir else None)
        else:
            _store = FirestoreDocumentStore()
        logger.info(f"Using {type(_store).__name__} for legacy migrations")
    return _store


def get_migration_service() -> MigrationService:
    return MigrationService(get_store())


def _read_upload(file: UploadFile) -> Any:
    file.file.seek(0)
    return parse_legacy_export(file.file.read())


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/migration/validate", response_model=PayloadValidation)
def validate_export(
    file: UploadFile = File(...),
    user: FirebaseUser = Depends(get_current_user),
) -> PayloadValidation:
    """Check that an uploaded export contains at least one known collection."""
    try:
        data = _read_upload(file)
    except PayloadError as e:
        return PayloadValidation(valid=False, errors=[e.message])
    return validate_legacy_payload(data)


@router.post("/migration/preview", response_model=PayloadPreview)
def preview_export(
    file: UploadFile = File(...),
    user: FirebaseUser = Depends(get_current_user),
) -> PayloadPreview:
    """Count the records per collection that a migration would process."""
    try:
        return get_migration_service().preview(_read_upload(file))
    except PayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/migration/run", response_model=MigrationResult)
def run_migration(
    file: UploadFile = File(...),
    stream: bool = False,
    user: FirebaseUser = Depends(get_current_user),
):
    """Migrate an uploaded export.

    Args:
        file: JSON export of the legacy system
        stream: If True, respond with NDJSON progress snapshots followed by
            the final result instead of a single JSON document
        user: Authenticated user

    Returns:
        MigrationResult, or a StreamingResponse when ``stream`` is set
    """
    try:
        data = _read_upload(file)
    except PayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        ensure_valid_payload(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)

    logger.info(f"Legacy migration requested by {user.uid} ({file.filename})")

    if stream:
        return StreamingResponse(
            _stream_migration(get_migration_service(), data),
            media_type="application/x-ndjson",
        )

    try:
        return get_migration_service().migrate(data, listener=LoggingProgressListener())
    except MigrationError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def _stream_migration(service: MigrationService, data: Any) -> Iterator[str]:
    """Run the migration on a worker thread and relay its progress as NDJSON lines."""
    listener = QueueProgressListener()
    finished = object()

    def worker() -> None:
        try:
            result = service.migrate(data, listener=listener)
            listener.snapshots.put({"type": "result", "result": result.model_dump(mode="json")})
        except MigrationError as e:
            listener.snapshots.put({"type": "error", "detail": e.message})
        finally:
            listener.snapshots.put(finished)

    threading.Thread(target=worker, name="legacy-migration", daemon=True).start()

    while True:
        item = listener.snapshots.get()
        if item is finished:
            break
        if isinstance(item, list):
            item = {
                "type": "progress",
                "collections": [progress.model_dump(mode="json") for progress in item],
            }
        yield json.dumps(item, ensure_ascii=False) + "\n"
