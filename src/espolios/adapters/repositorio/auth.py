"""Login exchange against the external repository service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from ...domain.errors import UpstreamAuthError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"


class RepositorioAuthenticator:
    """Trades the service credentials for a bearer token.

    Args:
        base_url: Root URL of the repository service
        username: Service account user
        password: Service account password
        timeout: Request timeout in seconds
        session: Optional ``requests.Session`` (shared with the upload client)
    """

    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._login_url = base_url.rstrip("/") + LOGIN_PATH
        self._username = username
        self._password = password
        self._timeout = timeout
        self._session = session or requests.Session()

    def login(self) -> str:
        """Perform the login call and return the token.

        Raises:
            UpstreamAuthError: Non-success status or no token in the answer
            UpstreamUnavailableError: Network failure or timeout
        """
        logger.info("Logging in to repository service as %s", self._username)
        try:
            response = self._session.post(
                self._login_url,
                json={"username": self._username, "password": self._password},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise UpstreamUnavailableError(f"Repository login failed: {exc}") from exc

        if not response.ok:
            raise UpstreamAuthError(f"Repository login rejected with status {response.status_code}")

        token = extract_json_field(response, "data", "token")
        if not isinstance(token, str) or not token:
            raise UpstreamAuthError("Repository login answer carries no token")
        return token


def extract_json_field(response: requests.Response, *path: str) -> Any:
    """Walk ``path`` inside the JSON body; ``None`` when any step is missing."""
    try:
        node: Any = response.json()
    except ValueError:
        return None
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node
