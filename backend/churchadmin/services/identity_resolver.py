"""Natural-key lookup of previously migrated documents."""

from __future__ import annotations

from typing import Any, Optional

from churchadmin.core.logging import get_logger
from churchadmin.repositories.document_store import DocumentStore

logger = get_logger("churchadmin.services.identity")


class IdentityResolver:
    """Finds the stored document a transformed record should merge into."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def resolve(
        self,
        collection: str,
        natural_key: Optional[str],
        document: dict[str, Any],
    ) -> Optional[str]:
        """Look up an existing document by the record's natural key.

        Args:
            collection: Target collection to search
            natural_key: Document field holding the natural key, or None when
                the kind has no identity (every record is new)
            document: Transformed document

        Returns:
            ID of the matching stored document, or None
        """
        if natural_key is None:
            return None

        # Exact match, no case or whitespace normalization
        value = document.get(natural_key)
        if not value:
            return None

        existing_id = self.store.find_one_by_field(collection, natural_key, value)
        if existing_id:
            logger.debug(f"Matched {collection}.{natural_key} to existing document {existing_id}")
        return existing_id
