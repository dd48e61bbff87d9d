from __future__ import annotations

from ...domain.errors import DocumentNotFoundError
from ...domain.models import Document
from ...persistence.ports import CollectionRepository


class GetDocumentUseCase:
    """Use case for retrieving a single document by ID."""

    def __init__(self, repository: CollectionRepository) -> None:
        self.repository = repository

    def execute(self, collection: str, document_id: str) -> Document:
        """
        Execute the get document use case.

        Args:
            collection: Name of the collection
            document_id: Identifier of the document

        Returns:
            The stored document

        Raises:
            DocumentNotFoundError: If no document has that identifier
        """
        document = self.repository.find_by_id(collection, document_id)
        if document is None:
            raise DocumentNotFoundError(collection, document_id)
        return document
