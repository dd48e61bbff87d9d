from __future__ import annotations

from ...domain.errors import DocumentNotFoundError
from ...persistence.ports import CollectionRepository


class DeleteDocumentUseCase:
    """Use case for removing a document by ID."""

    def __init__(self, repository: CollectionRepository) -> None:
        self.repository = repository

    def execute(self, collection: str, document_id: str) -> None:
        if not self.repository.delete_by_id(collection, document_id):
            raise DocumentNotFoundError(collection, document_id)
