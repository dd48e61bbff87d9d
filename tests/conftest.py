from __future__ import annotations

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path, override=False)

# Force the in-memory store and a fake repository service *before* any
# application module is imported so the container never reaches real services.
os.environ["STORAGE__DRIVER"] = "in_memory"
os.environ["REPOSITORIO__BASE_URL"] = "http://repositorio.test"
os.environ["REPOSITORIO__USERNAME"] = "espolios"
os.environ["REPOSITORIO__PASSWORD"] = "secret"

from src.espolios.application.interfaces import NullObservabilityRecorder  # noqa: E402
from src.espolios.domain.errors import UpstreamUnavailableError  # noqa: E402
from src.espolios.persistence.adapters.in_memory import InMemoryCollectionRepository  # noqa: E402
from src.espolios.services.ingestion_pipeline import IngestionPipeline  # noqa: E402

ARRAY_FIELDS = {"materiais", "categoria", "lugares"}


class FakeUploader:
    """Returns a distinct URL per upload and remembers what it received."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[bytes, str, str | None]] = []

    def upload(self, file_bytes: bytes, filename: str, content_type: str | None = None) -> str:
        self.calls.append((file_bytes, filename, content_type))
        if self.fail:
            raise UpstreamUnavailableError("repository is down")
        return f"https://cdn.test/espolios/{len(self.calls)}/{filename}"


class FakeStream:
    def __init__(self, data: bytes) -> None:
        self.data = data

    async def read(self, size: int = -1) -> bytes:
        return self.data


@pytest.fixture
def repository() -> InMemoryCollectionRepository:
    return InMemoryCollectionRepository()


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def pipeline(uploader: FakeUploader) -> IngestionPipeline:
    return IngestionPipeline(
        uploader=uploader,
        array_fields=ARRAY_FIELDS,
        observability=NullObservabilityRecorder(),
    )
