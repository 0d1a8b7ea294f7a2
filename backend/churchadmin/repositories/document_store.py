"""
Document Store Interface

The persistence boundary used by the legacy importer: a key-value document
store that can find a document by field, insert, and merge-upsert.
"""

from typing import Any, Optional, Protocol


class DocumentStore(Protocol):
    """Minimal document store contract."""

    def find_one_by_field(self, collection: str, field: str, value: Any) -> Optional[str]:
        """Return the ID of one document whose ``field`` equals ``value``, or None."""
        ...

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        """Insert a new document with a store-generated ID and return the ID."""
        ...

    def merge_upsert(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        """Merge fields into ``doc_id``, creating it if absent. Untouched fields are kept."""
        ...
