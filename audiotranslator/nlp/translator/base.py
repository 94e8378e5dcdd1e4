from __future__ import annotations
from abc import ABC, abstractmethod
from audiotranslator.contracts import AudioArtifact, TranslationResult
from audiotranslator.nlp.languages import LanguagePair

class Translator(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def translate(self, artifact: AudioArtifact, languages: LanguagePair) -> TranslationResult:
        """Translate one recording. Raises TranslationError on any failure."""

    def close(self) -> None:
        return None
