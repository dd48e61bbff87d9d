from __future__ import annotations

import copy
import threading
from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId

from ...domain.errors import InvalidFieldPathError, StorageError
from ...domain.models import ID_FIELD, Document
from ...services.field_path_mapper import apply_field, split_field_path
from ..ports import CollectionRepository


class InMemoryCollectionRepository(CollectionRepository):
    """Development-friendly repository that keeps collections in memory.

    Mirrors the MongoDB adapter: ``ObjectId`` identifiers, ``$set`` update
    semantics with dotted keys, copies in and out so callers never alias
    stored state.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[Any, Document]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _object_id(document_id: str) -> ObjectId:
        try:
            return ObjectId(document_id)
        except (InvalidId, TypeError) as exc:
            raise StorageError(f"Invalid document id: {document_id!r}") from exc

    def find_all(self, collection: str) -> list[Document]:
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._collections.get(collection, {}).values()]

    def find_by_id(self, collection: str, document_id: str) -> Document | None:
        object_id = self._object_id(document_id)
        with self._lock:
            document = self._collections.get(collection, {}).get(object_id)
            return copy.deepcopy(document) if document is not None else None

    def insert(self, collection: str, document: Mapping[str, Any]) -> Document:
        stored = copy.deepcopy(dict(document))
        object_id = stored.setdefault(ID_FIELD, ObjectId())
        with self._lock:
            documents = self._collections.setdefault(collection, {})
            if object_id in documents:
                raise StorageError(f"Duplicate id {object_id} in {collection}")
            documents[object_id] = stored
            return copy.deepcopy(stored)

    def update_by_id(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> bool:
        object_id = self._object_id(document_id)
        with self._lock:
            document = self._collections.get(collection, {}).get(object_id)
            if document is None:
                return False
            try:
                for path in fields:
                    split_field_path(path)
            except InvalidFieldPathError as exc:
                raise StorageError(f"Cannot update {collection}/{document_id}: {exc}") from exc
            for path, value in fields.items():
                apply_field(document, path, copy.deepcopy(value))
            return True

    def delete_by_id(self, collection: str, document_id: str) -> bool:
        object_id = self._object_id(document_id)
        with self._lock:
            return self._collections.get(collection, {}).pop(object_id, None) is not None
