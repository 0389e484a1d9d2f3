"""
Firestore profile adapter - Implements ProfileStore protocol.

Profile documents live in a single collection (``users`` by default),
tagged by ``role`` and linked to the identity through the ``uid`` field.
The ``joinedon`` timestamp is assigned by Firestore on write.
"""

import logging
from typing import Any

import firebase_admin
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from src.domain.exceptions import ProfileStoreError
from src.domain.ports import ProfileRecord

logger = logging.getLogger(__name__)

# Backend failures and credential refresh failures
_CLIENT_ERRORS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


class FirestoreProfileStore:
    """
    Implements ProfileStore protocol via the Firestore client.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, app: firebase_admin.App | None = None, collection: str = "users") -> None:
        """
        Initialize store.

        Args:
            app: Firebase app to use (default app when None)
            collection: Collection holding the profile documents
        """
        self._collection = firestore.client(app).collection(collection)

    def add(self, data: dict[str, Any]) -> str:
        try:
            _, ref = self._collection.add({**data, "joinedon": firestore.SERVER_TIMESTAMP})
        except _CLIENT_ERRORS as exc:
            raise ProfileStoreError(f"Profile write failed: {exc}") from exc
        logger.info("Created profile %s for uid %s", ref.id, data.get("uid"))
        return ref.id

    def find_by_identity(self, identity_id: str) -> list[ProfileRecord]:
        query = self._collection.where(filter=FieldFilter("uid", "==", identity_id))
        try:
            return [ProfileRecord(id=doc.id, data=doc.to_dict() or {}) for doc in query.stream()]
        except _CLIENT_ERRORS as exc:
            raise ProfileStoreError(f"Profile query failed: {exc}") from exc

    def delete(self, record_id: str) -> None:
        try:
            self._collection.document(record_id).delete()
        except _CLIENT_ERRORS as exc:
            raise ProfileStoreError(f"Profile delete failed: {exc}") from exc
