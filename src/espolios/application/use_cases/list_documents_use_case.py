from __future__ import annotations

from ...domain.models import Document
from ...persistence.ports import CollectionRepository


class ListDocumentsUseCase:
    """Use case for listing every document of a collection."""

    def __init__(self, repository: CollectionRepository) -> None:
        self.repository = repository

    def execute(self, collection: str) -> list[Document]:
        return self.repository.find_all(collection)
