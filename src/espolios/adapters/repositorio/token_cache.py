from __future__ import annotations

import logging
import threading
from typing import Callable

from ...application.interfaces import TokenProvider

logger = logging.getLogger(__name__)


class TokenCache(TokenProvider):
    """Single-slot, in-memory cache for the repository bearer token.

    The token is fetched lazily through ``fetch`` (normally
    ``RepositorioAuthenticator.login``) and kept until a call using it is
    rejected. A lock serializes fetch and replacement so concurrent requests
    never see a partially updated slot and only one login runs at a time.
    """

    def __init__(self, fetch: Callable[[], str]) -> None:
        self._fetch = fetch
        self._token: str | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> str | None:
        return self._token

    def get_or_fetch(self) -> str:
        with self._lock:
            if self._token is None:
                self._token = self._fetch()
                logger.debug("Repository token refreshed")
            return self._token

    def invalidate(self, stale: str | None = None) -> None:
        with self._lock:
            # Another request may already have replaced the stale token
            if stale is not None and self._token != stale:
                return
            self._token = None
            logger.debug("Repository token invalidated")
