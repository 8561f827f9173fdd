"""Minimal Google Docs REST client authenticated with a service account.

Only two calls are needed: ``documents.get`` to read the body text and
``documents.batchUpdate`` to replace it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import google.auth.exceptions
import httpx
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from level_vote_bot.application.interfaces.document_writer import DocumentWriter
from level_vote_bot.domain.shared.exceptions import PersistenceError
from level_vote_bot.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

DOCS_API_BASE = "https://docs.googleapis.com/v1/documents"
DOCS_SCOPES = (
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive.file",
)
DEFAULT_TIMEOUT: float = 15.0


def load_service_account_credentials(raw: str) -> service_account.Credentials:
    """Build credentials from service-account JSON text or a path to a JSON file.

    Keys pasted into an environment variable often carry literal ``\\n``
    sequences; they are turned back into newlines.

    Raises:
        ValueError: If the value is not usable service-account JSON.
    """
    raw = raw.strip()
    try:
        if raw.startswith("{"):
            info = json.loads(raw)
        else:
            info = json.loads(Path(raw).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(ErrorMessages.GOOGLE_CREDENTIALS_INVALID) from e

    if not isinstance(info, dict):
        raise ValueError(ErrorMessages.GOOGLE_CREDENTIALS_INVALID)

    private_key = info.get("private_key")
    if isinstance(private_key, str):
        info["private_key"] = private_key.replace("\\n", "\n")

    try:
        return service_account.Credentials.from_service_account_info(info, scopes=list(DOCS_SCOPES))
    except (ValueError, KeyError) as e:
        raise ValueError(ErrorMessages.GOOGLE_CREDENTIALS_INVALID) from e


def extract_text(document: Mapping[str, Any]) -> str:
    """Concatenate every paragraph text run of a document body, in order."""
    parts: list[str] = []
    for element in document.get("body", {}).get("content", []):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        for item in paragraph.get("elements", []):
            text_run = item.get("textRun")
            if text_run:
                parts.append(text_run.get("content", ""))
    return "".join(parts)


def document_end_index(document: Mapping[str, Any]) -> int:
    """End index of the last structural element, or 1 for an empty body."""
    content = document.get("body", {}).get("content", [])
    if not content:
        return 1
    return int(content[-1].get("endIndex", 1))


def build_replace_requests(end_index: int, text: str) -> list[dict[str, Any]]:
    """batchUpdate requests that replace the whole body with ``text``.

    The body always ends with a newline that cannot be deleted, so the
    deletable range is ``[1, end_index - 1)`` and only exists past index 2.
    """
    requests: list[dict[str, Any]] = []
    if end_index > 2:
        requests.append(
            {"deleteContentRange": {"range": {"startIndex": 1, "endIndex": end_index - 1}}}
        )
    if text:
        requests.append({"insertText": {"location": {"index": 1}, "text": text}})
    return requests


class GoogleDocsClient:
    """Async wrapper over the Docs REST API.

    Token refresh goes through google-auth's blocking ``requests`` transport,
    so it runs in a worker thread.
    """

    def __init__(
        self,
        credentials: service_account.Credentials,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        base_url: str = DOCS_API_BASE,
    ) -> None:
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._client: httpx.AsyncClient | None = None
        self._refresh_lock = asyncio.Lock()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def _authorization(self) -> dict[str, str]:
        async with self._refresh_lock:
            if not self._credentials.valid:
                await asyncio.to_thread(self._credentials.refresh, GoogleAuthRequest())
        return {"Authorization": f"Bearer {self._credentials.token}"}

    async def _request(
        self, method: str, url: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            headers = await self._authorization()
            response = await self._get_client().request(method, url, headers=headers, json=payload)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, google.auth.exceptions.GoogleAuthError, ValueError) as e:
            raise PersistenceError(
                ErrorMessages.GOOGLE_REQUEST_FAILED.format(error=e), "google_docs"
            ) from e

    async def get_document(self, document_id: str) -> dict[str, Any]:
        return await self._request("GET", f"{self._base_url}/{document_id}")

    async def batch_update(self, document_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return await self._request(
            "POST", f"{self._base_url}/{document_id}:batchUpdate", {"requests": requests}
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class GoogleDocsDocument(DocumentWriter):
    """One document addressed by id, read and replaced as plain text."""

    def __init__(self, client: GoogleDocsClient, document_id: str) -> None:
        self._client = client
        self._document_id = document_id
        logger.info(LogTemplates.GOOGLE_CLIENT_INITIALIZED, document_id)

    @property
    def name(self) -> str:
        return self._document_id

    async def read_text(self) -> str:
        document = await self._client.get_document(self._document_id)
        return extract_text(document)

    async def replace_text(self, text: str) -> None:
        document = await self._client.get_document(self._document_id)
        requests = build_replace_requests(document_end_index(document), text)
        if requests:
            await self._client.batch_update(self._document_id, requests)
