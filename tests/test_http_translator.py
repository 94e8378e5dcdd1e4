from __future__ import annotations

import httpx
import pytest

from audiotranslator.contracts import AudioArtifact, ErrorKind, TranslationError
from audiotranslator.nlp.languages import LanguagePair
from audiotranslator.nlp.translator.http import HttpTranslator, cache_busted_url

_NOW = 1_700_000_000.123


def _translator(handler) -> HttpTranslator:
    return HttpTranslator(
        "https://svc.test",
        transport=httpx.MockTransport(handler),
        clock=lambda: _NOW,
    )


def _artifact() -> AudioArtifact:
    return AudioArtifact(data=b"RIFFfake-wav-bytes", chunk_count=2)


def test_cache_busted_url() -> None:
    assert cache_busted_url("https://x/a.mp3", now=1.5) == "https://x/a.mp3?t=1500"
    assert cache_busted_url("https://x/a.mp3?sig=1", now=2.0) == "https://x/a.mp3?sig=1&t=2000"


def test_translate_posts_multipart_with_wire_codes() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content
        return httpx.Response(200, json={"original_text": "hi", "translated_text": "नमस्ते"})

    tr = _translator(handler)
    res = tr.translate(_artifact(), LanguagePair.from_values("english", "hindi"))

    assert seen["method"] == "POST"
    assert seen["url"] == "https://svc.test/translate"
    assert str(seen["content_type"]).startswith("multipart/form-data")
    body = seen["body"]
    assert isinstance(body, bytes)
    assert b'name="file"; filename="recording.wav"' in body
    assert b"RIFFfake-wav-bytes" in body
    assert b'name="source_language"\r\n\r\nen' in body
    assert b'name="target_language"\r\n\r\nhi' in body
    assert res.original_text == "hi"
    assert res.translated_text == "नमस्ते"
    assert res.audio_url is None
    assert res.provider == "http"


def test_success_with_audio_url_appends_timestamp() -> None:
    tr = _translator(
        lambda request: httpx.Response(
            200,
            json={"original_text": "hi", "translated_text": "नमस्ते", "audio_url": "https://x/a.mp3"},
        )
    )
    res = tr.translate(_artifact(), LanguagePair())
    assert res.audio_url == "https://x/a.mp3?t=1700000000123"


@pytest.mark.parametrize(
    "response,kind",
    [
        (httpx.Response(400, json={"detail": "no speech"}), ErrorKind.EMPTY_SPEECH),
        (httpx.Response(200, json={"error": "no speech"}), ErrorKind.EMPTY_SPEECH),
        (httpx.Response(500, text="boom"), ErrorKind.SERVER_ERROR),
        (httpx.Response(404, text="missing"), ErrorKind.SERVER_ERROR),
        (httpx.Response(200, text="<html>not json</html>"), ErrorKind.NETWORK_ERROR),
        (httpx.Response(200, json=["not", "an", "object"]), ErrorKind.NETWORK_ERROR),
    ],
)
def test_failure_classification(response: httpx.Response, kind: ErrorKind) -> None:
    tr = _translator(lambda request: response)
    with pytest.raises(TranslationError) as exc_info:
        tr.translate(_artifact(), LanguagePair())
    assert exc_info.value.kind == kind


def test_transport_failure_uses_speak_again_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name or service not known", request=request)

    tr = _translator(handler)
    with pytest.raises(TranslationError) as exc_info:
        tr.translate(_artifact(), LanguagePair())
    err = exc_info.value
    assert err.kind == ErrorKind.NETWORK_ERROR
    assert err.message == TranslationError(ErrorKind.EMPTY_SPEECH).message
    assert "ConnectError" in err.detail


def test_server_error_message_differs_from_speak_again() -> None:
    tr = _translator(lambda request: httpx.Response(503))
    with pytest.raises(TranslationError) as exc_info:
        tr.translate(_artifact(), LanguagePair())
    assert exc_info.value.message == "⚠️ Server Error, Try Again..."


def test_missing_text_fields_become_empty_strings() -> None:
    tr = _translator(lambda request: httpx.Response(200, json={"audio_url": ""}))
    res = tr.translate(_artifact(), LanguagePair())
    assert res.original_text == ""
    assert res.translated_text == ""
    assert res.audio_url is None
