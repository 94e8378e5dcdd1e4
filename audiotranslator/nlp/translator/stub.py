from __future__ import annotations
from .base import Translator
from audiotranslator.contracts import AudioArtifact, ErrorKind, TranslationError, TranslationResult
from audiotranslator.nlp.languages import LanguagePair

class StubTranslator(Translator):
    @property
    def name(self) -> str:
        return "stub"

    def translate(self, artifact: AudioArtifact, languages: LanguagePair) -> TranslationResult:
        # Deterministic, test-friendly
        if artifact.chunk_count <= 0:
            raise TranslationError(ErrorKind.EMPTY_SPEECH, "stub: empty recording")
        src, tgt = languages.wire_codes()
        original = f"[{src}] {artifact.duration:.1f}s of speech"
        return TranslationResult(
            original_text=original,
            translated_text=f"[{tgt}] {original}",
            audio_url=None,
            provider=self.name,
        )
