"""
HTTP client for the remote speech translation service.

One multipart POST per recording. Every failure is mapped onto a
``TranslationError`` kind; nothing is retried, the user records again.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import httpx

from .base import Translator
from audiotranslator.contracts import AudioArtifact, ErrorKind, TranslationError, TranslationResult
from audiotranslator.nlp.languages import LanguagePair

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://translatorbackend-production.up.railway.app"


def cache_busted_url(url: str, now: Optional[float] = None) -> str:
    """Append ``t=<epoch ms>`` so a reused audio URL is fetched fresh."""
    stamp = int((time.time() if now is None else now) * 1000)
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}t={stamp}"


class HttpTranslator(Translator):
    """Synchronous httpx wrapper for the ``/translate`` endpoint.

    Called from a request thread, never from the UI thread, so a slow or
    hung server only delays that one result.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        endpoint: str = "/translate",
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Scheme and host of the translation service.
            endpoint: Path of the translate route.
            timeout: Per-request timeout in seconds; None waits indefinitely.
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
            clock: Time source for the playback cache-busting stamp.
        """
        self._base_url = base_url.rstrip("/")
        self._endpoint = "/" + endpoint.lstrip("/")
        self._clock = clock
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "http"

    def translate(self, artifact: AudioArtifact, languages: LanguagePair) -> TranslationResult:
        source_code, target_code = languages.wire_codes()
        files = {"file": (artifact.filename, artifact.data, artifact.mime_type)}
        data = {"source_language": source_code, "target_language": target_code}

        logger.info(
            "translate_request_sent",
            extra={
                "source_language": source_code,
                "target_language": target_code,
                "bytes": len(artifact.data),
            },
        )
        try:
            resp = self._client.post(self._endpoint, files=files, data=data)
        except httpx.HTTPError as exc:
            raise TranslationError(ErrorKind.NETWORK_ERROR, f"transport failure: {exc!r}") from exc

        if resp.status_code == 400:
            raise TranslationError(ErrorKind.EMPTY_SPEECH, f"HTTP 400: {resp.text[:200]}")
        if not resp.is_success:
            raise TranslationError(ErrorKind.SERVER_ERROR, f"HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TranslationError(ErrorKind.NETWORK_ERROR, "response body is not JSON") from exc
        return self._parse_payload(payload)

    def _parse_payload(self, payload: Any) -> TranslationResult:
        if not isinstance(payload, dict):
            raise TranslationError(ErrorKind.NETWORK_ERROR, "response body is not a JSON object")
        if payload.get("error"):
            raise TranslationError(ErrorKind.EMPTY_SPEECH, f"service error: {payload['error']}")

        audio_url = payload.get("audio_url") or None
        if audio_url:
            audio_url = cache_busted_url(str(audio_url), now=self._clock())
        return TranslationResult(
            original_text=str(payload.get("original_text") or ""),
            translated_text=str(payload.get("translated_text") or ""),
            audio_url=audio_url,
            provider=self.name,
        )

    def close(self) -> None:
        self._client.close()
