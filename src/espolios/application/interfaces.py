from __future__ import annotations

from typing import Any, Mapping, Protocol


class FileUploader(Protocol):
    """Port for sending a file to an external repository and getting its URL back."""

    def upload(self, file_bytes: bytes, filename: str, content_type: str | None = None) -> str:
        """Upload the bytes and return the public URL assigned by the repository."""


class TokenProvider(Protocol):
    """Port for a cached bearer credential."""

    def get_or_fetch(self) -> str:
        """Return the cached token, logging in first when there is none."""

    def invalidate(self, stale: str | None = None) -> None:
        """Discard the cached token (only if it is still ``stale``, when given)."""


class ObservabilityRecorder(Protocol):
    """Port describing how domain events are emitted."""

    def record_event(
        self,
        stage: str,
        details: Mapping[str, Any] | None = None,
        trace_id: str | None = None,
    ) -> None:
        """Emit a structured event for the given stage.

        Args:
            stage: Name of the pipeline stage
            details: Optional structured details about the event
            trace_id: Optional trace ID for linking events of one request
        """


class NullObservabilityRecorder(ObservabilityRecorder):
    """No-op recorder used by default in tests and as a fallback."""

    def record_event(
        self,
        stage: str,
        details: Mapping[str, Any] | None = None,
        trace_id: str | None = None,
    ) -> None:  # noqa: D401
        """No-op implementation that does nothing."""
        return None
