"""Authenticated file upload to the external repository service."""

from __future__ import annotations

import logging
from http import HTTPStatus

import requests

from ...application.interfaces import FileUploader, TokenProvider
from ...domain.errors import UpstreamAuthError, UpstreamUnavailableError
from .auth import extract_json_field

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/repositorio/files"


class RepositorioUploadClient(FileUploader):
    """Uploads files as public objects and returns their URL.

    An ``401 Unauthorized`` answer discards the cached token, fetches a new one
    and resends the request exactly once. Every other failure is final.

    Args:
        base_url: Root URL of the repository service
        tokens: Bearer token provider (see ``TokenCache``)
        folder: Destination folder sent with every upload
        timeout: Request timeout in seconds
        session: Optional ``requests.Session``
    """

    def __init__(
        self,
        *,
        base_url: str,
        tokens: TokenProvider,
        folder: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._upload_url = base_url.rstrip("/") + UPLOAD_PATH
        self._tokens = tokens
        self._folder = folder
        self._timeout = timeout
        self._session = session or requests.Session()

    def upload(self, file_bytes: bytes, filename: str, content_type: str | None = None) -> str:
        token = self._tokens.get_or_fetch()
        response = self._send(token, file_bytes, filename, content_type)

        if response.status_code == HTTPStatus.UNAUTHORIZED:
            logger.info("Repository rejected token for %s, retrying with a fresh one", filename)
            self._tokens.invalidate(token)
            token = self._tokens.get_or_fetch()
            response = self._send(token, file_bytes, filename, content_type)
            if response.status_code == HTTPStatus.UNAUTHORIZED:
                self._tokens.invalidate(token)
                raise UpstreamAuthError("Repository rejected a freshly issued token")

        if not response.ok:
            raise UpstreamUnavailableError(f"Repository upload failed with status {response.status_code}")

        url = extract_json_field(response, "data", "url")
        if not isinstance(url, str) or not url:
            raise UpstreamUnavailableError("Repository upload answer carries no URL")

        logger.info("Uploaded %s (%d bytes) to %s", filename, len(file_bytes), url)
        return url

    def _send(
        self,
        token: str,
        file_bytes: bytes,
        filename: str,
        content_type: str | None,
    ) -> requests.Response:
        file_field = (filename, file_bytes, content_type) if content_type else (filename, file_bytes)
        try:
            return self._session.post(
                self._upload_url,
                files={"file": file_field},
                data={"publicFile": "true", "folder": self._folder},
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise UpstreamUnavailableError(f"Repository upload failed: {exc}") from exc
