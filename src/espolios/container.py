from __future__ import annotations

import logging
import os
from functools import lru_cache

import requests

from .adapters.repositorio import RepositorioAuthenticator, RepositorioUploadClient, TokenCache
from .application.use_cases import (
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    GetDocumentUseCase,
    ListDocumentsUseCase,
    UpdateDocumentUseCase,
)
from .config import Settings, settings as default_settings
from .observability.logger import LoggingObservabilityRecorder
from .persistence.adapters.in_memory import InMemoryCollectionRepository
from .persistence.adapters.mongo import MongoCollectionRepository
from .persistence.ports import CollectionRepository
from .services.ingestion_pipeline import IngestionPipeline

logger = logging.getLogger(__name__)


class AppContainer:
    """Application composition root wiring services, repositories, and adapters."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self.observability = LoggingObservabilityRecorder()
        self.repository = self._create_repository()

        repositorio = self.settings.repositorio
        self.http_session = requests.Session()
        self.authenticator = RepositorioAuthenticator(
            base_url=repositorio.base_url or "",
            username=repositorio.username or "",
            password=repositorio.password or "",
            timeout=repositorio.timeout_seconds,
            session=self.http_session,
        )
        self.token_cache = TokenCache(self.authenticator.login)
        self.upload_client = RepositorioUploadClient(
            base_url=repositorio.base_url or "",
            tokens=self.token_cache,
            folder=repositorio.folder,
            timeout=repositorio.timeout_seconds,
            session=self.http_session,
        )
        if not repositorio.base_url:
            logger.warning("REPOSITORIO__BASE_URL is not set; file uploads will fail")

        self.ingestion_pipeline = IngestionPipeline(
            uploader=self.upload_client,
            array_fields=set(self.settings.ingestion.array_fields),
            observability=self.observability,
            image_field=self.settings.ingestion.image_field,
        )

        # Use cases
        self.list_documents_use_case = ListDocumentsUseCase(repository=self.repository)
        self.get_document_use_case = GetDocumentUseCase(repository=self.repository)
        self.create_document_use_case = CreateDocumentUseCase(
            repository=self.repository,
            pipeline=self.ingestion_pipeline,
        )
        self.update_document_use_case = UpdateDocumentUseCase(
            repository=self.repository,
            pipeline=self.ingestion_pipeline,
        )
        self.delete_document_use_case = DeleteDocumentUseCase(repository=self.repository)

    def _create_repository(self) -> CollectionRepository:
        """
        Factory method to create the storage adapter based on configuration.

        Returns:
            CollectionRepository instance (MongoCollectionRepository or InMemoryCollectionRepository)

        Raises:
            ValueError: If the mongo driver is selected without a URL or database name
        """
        storage = self.settings.storage

        if storage.driver == "in_memory":
            logger.warning("Using in-memory repository; documents are lost on restart")
            return InMemoryCollectionRepository()

        logger.info("Initializing MongoDB repository")
        return MongoCollectionRepository(
            uri=storage.mongo_url or os.getenv("MONGO_URL", ""),
            database_name=storage.db_name or os.getenv("DB_NAME", ""),
            server_selection_timeout_ms=storage.server_selection_timeout_ms,
        )

    def close(self) -> None:
        if isinstance(self.repository, MongoCollectionRepository):
            self.repository.close()
        self.http_session.close()


@lru_cache
def get_app_container() -> AppContainer:
    """Return a cached container instance so FastAPI dependencies share services."""

    return AppContainer()
