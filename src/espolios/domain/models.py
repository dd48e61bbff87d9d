from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field

ID_FIELD = "_id"
IMAGE_FIELD_PATH = "catalogacao.anexo.imagem"

Scalar = Union[str, int, float, bool, None]
DocumentValue = Union[Scalar, "DocumentMapping", "DocumentSequence"]
DocumentMapping = dict[str, DocumentValue]
DocumentSequence = list[DocumentValue]

# Stored documents may also carry store-native values (ObjectId, datetime) on read.
Document = dict[str, Any]


class FieldPart(BaseModel):
    """A named, non-file value of a form submission."""

    name: str
    value: str


class FilePart(BaseModel):
    """A file value of a form submission.

    ``stream`` exposes an awaitable ``read()`` (Starlette's ``UploadFile`` does);
    the body is only read when the pipeline reaches this part.
    """

    name: str
    filename: str = ""
    content_type: str | None = None
    stream: Any = Field(repr=False)


FormPart = Union[FieldPart, FilePart]
