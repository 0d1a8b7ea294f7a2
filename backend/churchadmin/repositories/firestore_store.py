"""
Firestore Document Store

DocumentStore implementation backed by Cloud Firestore through the
Firebase Admin SDK (Application Default Credentials).

Collections written by the legacy importer:
    assistidos/{auto_id} - Beneficiaries
    members/{auto_id}    - Church members
    events/{auto_id}     - Church events
"""

from typing import Any, Optional

import firebase_admin
from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter


class FirestoreDocumentStore:
    """Document store using Firestore for persistence."""

    def __init__(self) -> None:
        # Initialize Firebase Admin SDK with Application Default Credentials
        if not firebase_admin._apps:
            firebase_admin.initialize_app()

        self.db = firestore.client()

    def find_one_by_field(self, collection: str, field: str, value: Any) -> Optional[str]:
        """
        Find a document by exact field match.

        Args:
            collection: Collection name
            field: Document field to match
            value: Value compared with ``==``

        Returns:
            ID of the first matching document, or None if there is no match
        """
        query = (
            self.db.collection(collection)
            .where(filter=FieldFilter(field, "==", value))
            .limit(1)
        )
        docs = list(query.stream())
        if not docs:
            return None
        return docs[0].id

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        """
        Create a document with an auto-generated ID.

        Args:
            collection: Collection name
            document: Document data

        Returns:
            The generated document ID
        """
        doc_ref = self.db.collection(collection).document()
        doc_ref.set(document)
        return doc_ref.id

    def merge_upsert(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        """
        Merge fields into a document, creating it if it does not exist.

        Args:
            collection: Collection name
            doc_id: Document ID
            partial: Fields to write; fields not present are left untouched
        """
        self.db.collection(collection).document(doc_id).set(partial, merge=True)
