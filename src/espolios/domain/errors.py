"""Error kinds raised by the document service.

The router translates them into HTTP statuses:

    DocumentNotFoundError  -> 404
    InvalidRequestError    -> 400 (InvalidFieldPathError included)
    UploadError (and subclasses), StorageError -> 500
"""

from __future__ import annotations


class EspoliosError(Exception):
    """Base class for every error raised by the service."""


class DocumentNotFoundError(EspoliosError):
    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document {document_id} not found in collection {collection}")
        self.collection = collection
        self.document_id = document_id


class InvalidRequestError(EspoliosError):
    """The request body cannot be turned into a document."""


class InvalidFieldPathError(InvalidRequestError, ValueError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid field path: {path!r}")
        self.path = path


class StorageError(EspoliosError):
    """Any fault reported by the storage collaborator."""


class UploadError(EspoliosError):
    """File upload to the external repository service failed."""


class UpstreamAuthError(UploadError):
    """The external repository service rejected our credentials."""


class UpstreamUnavailableError(UploadError):
    """Network failure or unexpected answer from the external repository service."""
