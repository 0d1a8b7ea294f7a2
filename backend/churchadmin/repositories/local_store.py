import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from churchadmin.core.exceptions import DocumentStoreError


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class LocalDocumentStore:
    """File-backed document store: ``<data_dir>/<collection>/<doc_id>.json``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        root = base_dir or Path(__file__).resolve().parents[2] / "data"
        self.data_dir = Path(root)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _collection_dir(self, collection: str) -> Path:
        path = self.data_dir / collection
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DocumentStoreError(f"Corrupt document file: {path.name}", {"path": str(path)}) from e

    def _write(self, path: Path, document: dict[str, Any]) -> None:
        path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )

    def find_one_by_field(self, collection: str, field: str, value: Any) -> Optional[str]:
        for path in sorted(self._collection_dir(collection).glob("*.json")):
            if self._read(path).get(field) == value:
                return path.stem
        return None

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        doc_id = uuid4().hex
        self._write(self._collection_dir(collection) / f"{doc_id}.json", document)
        return doc_id

    def merge_upsert(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        path = self._collection_dir(collection) / f"{doc_id}.json"
        existing = self._read(path) if path.exists() else {}
        existing.update(partial)
        self._write(path, existing)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        path = self._collection_dir(collection) / f"{doc_id}.json"
        if not path.exists():
            return None
        return self._read(path)

    def list_ids(self, collection: str) -> list[str]:
        return [path.stem for path in sorted(self._collection_dir(collection).glob("*.json"))]
