from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from ..application.interfaces import ObservabilityRecorder

LOGGER_NAME = "espolios"


def _build_logger() -> logging.Logger:
    """Build logger that respects the centralized LOG_LEVEL configuration."""
    from ..config import settings

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)
    return logger


class LoggingObservabilityRecorder(ObservabilityRecorder):
    """Adapter that writes structured events to Python logging."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _build_logger()

    def record_event(
        self,
        stage: str,
        details: Mapping[str, Any] | None = None,
        trace_id: str | None = None,
    ) -> None:
        log_parts = [f"stage={stage}"]
        if trace_id:
            log_parts.append(f"trace_id={trace_id}")
        if details:
            log_parts.append(f"details={json.dumps(details, ensure_ascii=False, default=str)}")
        # Per-field events are noisy; keep them at DEBUG
        level = logging.DEBUG if stage == "ingestion.field" else logging.INFO
        self._logger.log(level, " ".join(log_parts))
