from __future__ import annotations

from .create_document_use_case import CreateDocumentUseCase
from .delete_document_use_case import DeleteDocumentUseCase
from .get_document_use_case import GetDocumentUseCase
from .list_documents_use_case import ListDocumentsUseCase
from .update_document_use_case import UpdateDocumentUseCase

__all__ = [
    "CreateDocumentUseCase",
    "DeleteDocumentUseCase",
    "GetDocumentUseCase",
    "ListDocumentsUseCase",
    "UpdateDocumentUseCase",
]
