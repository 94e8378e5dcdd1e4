from __future__ import annotations

import argparse
import wave
from pathlib import Path

from audiotranslator.contracts import AudioArtifact, TranslationError
from audiotranslator.nlp.languages import Language, LanguagePair
from audiotranslator.nlp.translator.factory import get_translator
from audiotranslator.nlp.translator.http import DEFAULT_BASE_URL


def _load_wav_artifact(path: Path) -> AudioArtifact:
    with wave.open(str(path), "rb") as wf:
        sample_rate = wf.getframerate()
        channels = wf.getnchannels()
        frames = wf.getnframes()
    return AudioArtifact(
        data=path.read_bytes(),
        filename=path.name,
        sample_rate=sample_rate,
        channels=channels,
        chunk_count=1 if frames > 0 else 0,
    )


def main(argv: list[str] | None = None) -> int:
    names = [lang.value for lang in Language]
    ap = argparse.ArgumentParser()
    ap.add_argument("wav_path", help="Path to WAV file")
    ap.add_argument("--source", default="english", choices=names, help="spoken language")
    ap.add_argument("--target", default="hindi", choices=names, help="translate into")
    ap.add_argument("--translator", default=None, help="http | stub (or set AUDIOTRANSLATOR_TRANSLATOR)")
    ap.add_argument("--base-url", default=DEFAULT_BASE_URL, help="translation service base URL")
    args = ap.parse_args(argv)

    artifact = _load_wav_artifact(Path(args.wav_path))
    languages = LanguagePair.from_values(args.source, args.target)
    tr = get_translator(args.translator, base_url=args.base_url)
    try:
        res = tr.translate(artifact, languages)
    except TranslationError as e:
        print(f"[{e.kind.value}] {e.message}")
        if e.detail:
            print(f"detail: {e.detail}")
        return 1
    finally:
        tr.close()

    src, tgt = languages.wire_codes()
    print(f"[provider] {res.provider}")
    print(f"---- {src} ----")
    print(res.original_text)
    print(f"---- {tgt} ----")
    print(res.translated_text)
    if res.audio_url:
        print(f"[audio] {res.audio_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
