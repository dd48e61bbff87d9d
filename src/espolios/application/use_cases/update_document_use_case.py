from __future__ import annotations

from typing import Any, Iterable, Mapping

from starlette.concurrency import run_in_threadpool

from ...domain.errors import DocumentNotFoundError
from ...domain.models import ID_FIELD, Document, FormPart
from ...persistence.ports import CollectionRepository
from ...services.field_path_mapper import flatten_document
from ...services.ingestion_pipeline import IngestionPipeline


class UpdateDocumentUseCase:
    """Use case for a partial update of an existing document."""

    def __init__(self, repository: CollectionRepository, pipeline: IngestionPipeline) -> None:
        self.repository = repository
        self.pipeline = pipeline

    def execute(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> Document:
        """
        Apply ``fields`` to the document and return its new state.

        The identifier is immutable: an ``_id`` key in ``fields`` is dropped.

        Raises:
            DocumentNotFoundError: If no document has that identifier (no upsert)
        """
        changes = {key: value for key, value in fields.items() if key != ID_FIELD}
        if not self.repository.update_by_id(collection, document_id, changes):
            raise DocumentNotFoundError(collection, document_id)
        updated = self.repository.find_by_id(collection, document_id)
        if updated is None:
            # Deleted by someone else between the two calls
            raise DocumentNotFoundError(collection, document_id)
        return updated

    async def execute_form(self, collection: str, document_id: str, parts: Iterable[FormPart]) -> Document:
        """
        Assemble the submitted form and merge it into the stored document.

        Nested form fields are applied as dotted paths so sibling fields
        already stored under the same parent survive.
        """
        document = await self.pipeline.assemble(parts)
        document.pop(ID_FIELD, None)
        return await run_in_threadpool(self.execute, collection, document_id, flatten_document(document))
