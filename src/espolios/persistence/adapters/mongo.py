from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from ...domain.errors import StorageError
from ...domain.models import ID_FIELD, Document
from ..ports import CollectionRepository

logger = logging.getLogger(__name__)


class MongoCollectionRepository(CollectionRepository):
    """
    Collection repository backed by MongoDB.

    Any collection name is accepted and resolved on the configured database.
    Documents are keyed by ``ObjectId``; identifiers travel as hex strings.

    Features:
    - Lazy connection on first use, verified with ``ping``
    - Bounded server selection timeout
    - Driver errors wrapped in ``StorageError``
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        server_selection_timeout_ms: int = 5000,
        client: MongoClient | None = None,
    ) -> None:
        """
        Args:
            uri: MongoDB connection URI
            database_name: Database holding the collections
            server_selection_timeout_ms: How long to wait for a reachable server
            client: Pre-built client (tests); skips the connection check
        """
        if not uri:
            raise ValueError("MongoDB URI is required. Set STORAGE__MONGO_URL or MONGO_URL.")
        if not database_name:
            raise ValueError("MongoDB database name is required. Set STORAGE__DB_NAME or DB_NAME.")

        self.uri = uri
        self.database_name = database_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client: MongoClient | None = client
        self._database: Database | None = client[database_name] if client is not None else None
        self._connect_lock = threading.Lock()

        logger.info("MongoCollectionRepository initialized: uri=%s, database=%s", self._masked_uri(), database_name)

    def _ensure_connection(self) -> Database:
        """Establish connection to MongoDB if not already connected."""
        with self._connect_lock:
            if self._database is None:
                logger.debug("Connecting to MongoDB: %s", self._masked_uri())
                client = MongoClient(self.uri, serverSelectionTimeoutMS=self.server_selection_timeout_ms)
                try:
                    client.admin.command("ping")
                except ServerSelectionTimeoutError as exc:
                    logger.error("Failed to connect to MongoDB: %s", exc)
                    client.close()
                    raise StorageError(f"Cannot connect to MongoDB: {exc}") from exc
                self._client = client
                self._database = client[self.database_name]
                logger.info("Successfully connected to MongoDB")
            return self._database

    def _masked_uri(self) -> str:
        """Return URI with password masked for logging."""
        if "@" not in self.uri:
            return self.uri
        credentials, host = self.uri.rsplit("@", 1)
        if "://" in credentials:
            scheme, user_pass = credentials.split("://", 1)
            if ":" in user_pass:
                user = user_pass.split(":", 1)[0]
                return f"{scheme}://{user}:****@{host}"
        return self.uri

    @staticmethod
    def _object_id(document_id: str) -> ObjectId:
        try:
            return ObjectId(document_id)
        except (InvalidId, TypeError) as exc:
            raise StorageError(f"Invalid document id: {document_id!r}") from exc

    def find_all(self, collection: str) -> list[Document]:
        database = self._ensure_connection()
        try:
            return list(database[collection].find())
        except PyMongoError as exc:
            raise StorageError(f"Failed to list {collection}: {exc}") from exc

    def find_by_id(self, collection: str, document_id: str) -> Document | None:
        object_id = self._object_id(document_id)
        database = self._ensure_connection()
        try:
            return database[collection].find_one({ID_FIELD: object_id})
        except PyMongoError as exc:
            raise StorageError(f"Failed to read {collection}/{document_id}: {exc}") from exc

    def insert(self, collection: str, document: Mapping[str, Any]) -> Document:
        database = self._ensure_connection()
        stored = dict(document)
        try:
            result = database[collection].insert_one(stored)
        except PyMongoError as exc:
            raise StorageError(f"Failed to insert into {collection}: {exc}") from exc
        stored[ID_FIELD] = result.inserted_id
        logger.debug("Inserted %s into %s", result.inserted_id, collection)
        return stored

    def update_by_id(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> bool:
        object_id = self._object_id(document_id)
        database = self._ensure_connection()
        try:
            if fields:
                result = database[collection].update_one({ID_FIELD: object_id}, {"$set": dict(fields)})
                return result.matched_count > 0
            # $set rejects an empty document; only report whether the target exists
            return database[collection].count_documents({ID_FIELD: object_id}, limit=1) > 0
        except PyMongoError as exc:
            raise StorageError(f"Failed to update {collection}/{document_id}: {exc}") from exc

    def delete_by_id(self, collection: str, document_id: str) -> bool:
        object_id = self._object_id(document_id)
        database = self._ensure_connection()
        try:
            result = database[collection].delete_one({ID_FIELD: object_id})
        except PyMongoError as exc:
            raise StorageError(f"Failed to delete {collection}/{document_id}: {exc}") from exc
        return result.deleted_count > 0

    def close(self) -> None:
        """Close the MongoDB connection."""
        with self._connect_lock:
            if self._client is not None:
                self._client.close()
                self._client = None
                self._database = None
                logger.info("MongoDB connection closed")
