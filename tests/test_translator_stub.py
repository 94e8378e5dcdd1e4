import pytest

from audiotranslator.contracts import AudioArtifact, ErrorKind, TranslationError
from audiotranslator.nlp.languages import LanguagePair
from audiotranslator.nlp.translator.factory import get_translator
from audiotranslator.nlp.translator.http import HttpTranslator
from audiotranslator.nlp.translator.stub import StubTranslator


def test_stub_translator_deterministic():
    tr = StubTranslator()
    artifact = AudioArtifact(data=b"\x00" * (44 + 32000), chunk_count=4)
    out = tr.translate(artifact, LanguagePair.from_values("english", "french"))
    assert out.provider == "stub"
    assert out.original_text == "[en] 1.0s of speech"
    assert out.translated_text == "[fr] [en] 1.0s of speech"


def test_stub_translator_rejects_empty_recording():
    with pytest.raises(TranslationError) as exc_info:
        StubTranslator().translate(AudioArtifact(data=b""), LanguagePair())
    assert exc_info.value.kind == ErrorKind.EMPTY_SPEECH


def test_factory_selects_provider(monkeypatch):
    monkeypatch.delenv("AUDIOTRANSLATOR_TRANSLATOR", raising=False)
    assert isinstance(get_translator("stub"), StubTranslator)
    http = get_translator(None, base_url="https://svc.test")
    assert isinstance(http, HttpTranslator)
    http.close()

    monkeypatch.setenv("AUDIOTRANSLATOR_TRANSLATOR", "stub")
    assert isinstance(get_translator(), StubTranslator)

    with pytest.raises(ValueError):
        get_translator("argos")
