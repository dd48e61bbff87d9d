from __future__ import annotations

from typing import Any, Iterable, Mapping

from starlette.concurrency import run_in_threadpool

from ...domain.models import Document, FormPart
from ...persistence.ports import CollectionRepository
from ...services.ingestion_pipeline import IngestionPipeline


class CreateDocumentUseCase:
    """Use case for inserting a new document, from JSON or from a form."""

    def __init__(self, repository: CollectionRepository, pipeline: IngestionPipeline) -> None:
        self.repository = repository
        self.pipeline = pipeline

    def execute(self, collection: str, document: Mapping[str, Any]) -> Document:
        """
        Insert ``document`` as given and return the stored version.

        Returns:
            The inserted document with its ``_id``, as the store holds it
        """
        return self.repository.insert(collection, document)

    async def execute_form(self, collection: str, parts: Iterable[FormPart]) -> Document:
        """
        Assemble a document from form parts (uploading files on the way) and insert it.

        Nothing is written when assembly fails.
        """
        document = await self.pipeline.assemble(parts)
        return await run_in_threadpool(self.execute, collection, document)
