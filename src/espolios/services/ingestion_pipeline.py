from __future__ import annotations

import asyncio
import logging
from typing import AbstractSet, Iterable
from uuid import uuid4

from ..application.interfaces import FileUploader, ObservabilityRecorder
from ..domain.models import IMAGE_FIELD_PATH, Document, FieldPart, FilePart, FormPart
from .field_path_mapper import apply_field, leaf_name

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Assembles a document from the parts of a form submission.

    Parts are handled strictly in arrival order: repeated array fields keep
    their submission order and a later file part replaces the URL stored by
    an earlier one. Any upload failure propagates and nothing is returned for
    persistence.
    """

    def __init__(
        self,
        *,
        uploader: FileUploader,
        array_fields: AbstractSet[str],
        observability: ObservabilityRecorder,
        image_field: str = IMAGE_FIELD_PATH,
    ) -> None:
        self.uploader = uploader
        self.array_fields = frozenset(array_fields)
        self.observability = observability
        self.image_field = image_field

    async def assemble(self, parts: Iterable[FormPart]) -> Document:
        trace_id = str(uuid4())
        document: Document = {}
        fields = 0
        uploads = 0

        for part in parts:
            if isinstance(part, FilePart):
                url = await self._upload(part, trace_id)
                if url is None:
                    continue
                apply_field(document, self.image_field, url)
                uploads += 1
            elif isinstance(part, FieldPart):
                self._apply(document, part, trace_id)
                fields += 1
            else:
                raise TypeError(f"Unsupported form part: {type(part).__name__}")

        self.observability.record_event(
            stage="ingestion.completed",
            details={"fields": fields, "uploads": uploads},
            trace_id=trace_id,
        )
        return document

    def _apply(self, document: Document, part: FieldPart, trace_id: str) -> None:
        is_array = leaf_name(part.name) in self.array_fields
        apply_field(document, part.name, part.value, is_array=is_array)
        self.observability.record_event(
            stage="ingestion.field",
            details={"path": part.name, "array": is_array},
            trace_id=trace_id,
        )

    async def _upload(self, part: FilePart, trace_id: str) -> str | None:
        data: bytes = await part.stream.read()
        if not part.filename and not data:
            # Browsers submit empty file inputs as a nameless, empty part
            logger.debug("Skipping empty file part %s", part.name)
            return None

        url = await asyncio.to_thread(self.uploader.upload, data, part.filename, part.content_type)
        self.observability.record_event(
            stage="ingestion.upload",
            details={
                "field": part.name,
                "filename": part.filename,
                "size_bytes": len(data),
                "url": url,
            },
            trace_id=trace_id,
        )
        return url
