from __future__ import annotations
import os
from typing import Optional
from .base import Translator
from .http import DEFAULT_BASE_URL, HttpTranslator
from .stub import StubTranslator

def get_translator(
    provider: str | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
    endpoint: str = "/translate",
    timeout: Optional[float] = None,
) -> Translator:
    provider = (provider or os.getenv("AUDIOTRANSLATOR_TRANSLATOR", "http")).lower().strip()

    if provider == "stub":
        return StubTranslator()
    if provider == "http":
        return HttpTranslator(base_url, endpoint=endpoint, timeout=timeout)

    raise ValueError(f"Unknown translator provider: {provider}")
