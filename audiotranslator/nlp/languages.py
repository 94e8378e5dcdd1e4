from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Language(str, Enum):
    ENGLISH = "english"
    HINDI = "hindi"
    BENGALI = "bengali"
    TAMIL = "tamil"
    TELUGU = "telugu"
    GUJARATI = "gujarati"
    SPANISH = "spanish"
    FRENCH = "french"
    GERMAN = "german"
    CHINESE = "chinese"
    JAPANESE = "japanese"
    RUSSIAN = "russian"

    @property
    def wire_code(self) -> str:
        return _WIRE_CODES[self]

    @property
    def label(self) -> str:
        return self.value[:1].upper() + self.value[1:]

    @classmethod
    def parse(cls, value: Union["Language", str]) -> "Language":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for lang in cls:
            if key in (lang.value, _WIRE_CODES[lang]):
                return lang
        raise ValueError(f"Unsupported language: {value!r}")


_WIRE_CODES: dict[Language, str] = {
    Language.ENGLISH: "en",
    Language.HINDI: "hi",
    Language.BENGALI: "bn",
    Language.TAMIL: "ta",
    Language.TELUGU: "te",
    Language.GUJARATI: "gu",
    Language.SPANISH: "es",
    Language.FRENCH: "fr",
    Language.GERMAN: "de",
    Language.CHINESE: "zh",
    Language.JAPANESE: "ja",
    Language.RUSSIAN: "ru",
}

LanguageLike = Union[Language, str]


def first_other_than(lang: Language) -> Language:
    for candidate in Language:
        if candidate != lang:
            return candidate
    raise ValueError("need at least two supported languages")


@dataclass
class LanguagePair:
    """
    Source/target selection for translation requests.

    Only set_source() repairs a collision. set_target() accepts any supported
    language, including the current source; the UI offers target_choices().
    """

    source: Language = Language.ENGLISH
    target: Language = Language.HINDI

    @classmethod
    def from_values(cls, source: LanguageLike, target: LanguageLike) -> "LanguagePair":
        pair = cls(target=Language.parse(target))
        pair.set_source(source)
        return pair

    def set_source(self, value: LanguageLike) -> None:
        lang = Language.parse(value)
        if lang == self.target:
            self.target = first_other_than(lang)
        self.source = lang

    def set_target(self, value: LanguageLike) -> None:
        self.target = Language.parse(value)

    def target_choices(self) -> list[Language]:
        return [lang for lang in Language if lang != self.source]

    def wire_codes(self) -> tuple[str, str]:
        return self.source.wire_code, self.target.wire_code

    def snapshot(self) -> "LanguagePair":
        return LanguagePair(source=self.source, target=self.target)
