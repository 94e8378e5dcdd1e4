from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from audiotranslator.audio.mic import SoundDeviceCapture
from audiotranslator.nlp.languages import LanguagePair
from audiotranslator.nlp.translator.base import Translator
from audiotranslator.nlp.translator.factory import get_translator


@dataclass(frozen=True)
class TranslatorServices:
    capture: SoundDeviceCapture
    languages: LanguagePair
    translator: Translator


def build_translator_services(args: Any) -> TranslatorServices:
    capture = SoundDeviceCapture(
        sample_rate=int(args.sr),
        channels=int(args.channels),
        device=args.device,
    )
    languages = LanguagePair.from_values(args.source_language, args.target_language)
    timeout = getattr(args, "request_timeout", None)
    translator = get_translator(
        str(args.translator),
        base_url=str(args.base_url),
        endpoint=str(args.endpoint),
        timeout=None if timeout is None else float(timeout),
    )
    return TranslatorServices(capture=capture, languages=languages, translator=translator)
