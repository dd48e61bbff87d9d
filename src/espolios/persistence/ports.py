from __future__ import annotations

from typing import Any, Mapping, Protocol

from ..domain.models import Document


class CollectionRepository(Protocol):
    """Port defining the storage primitives for named document collections.

    Identifiers are the string form of whatever the store assigns. A malformed
    identifier is a storage-level failure and raises ``StorageError``.
    """

    def find_all(self, collection: str) -> list[Document]:
        """Return every document of the collection."""

    def find_by_id(self, collection: str, document_id: str) -> Document | None:
        """Fetch a single document, or ``None`` when absent."""

    def insert(self, collection: str, document: Mapping[str, Any]) -> Document:
        """Persist a new document and return it as stored, ``_id`` included.

        A caller-supplied ``_id`` is kept as given, whatever its type.
        """

    def update_by_id(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> bool:
        """Apply ``fields`` with ``$set`` semantics (dotted keys address nested fields).

        Returns:
            True if a document matched the identifier, False otherwise
        """
        ...

    def delete_by_id(self, collection: str, document_id: str) -> bool:
        """Remove a document.

        Returns:
            True if a document was deleted, False if none matched
        """
        ...
