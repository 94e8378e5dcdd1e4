from __future__ import annotations

from enum import Enum
from typing import Iterator, Union

import httpx

from audiotranslator.audio.mic import MicError

Failure = Union[BaseException, str]

_FALLBACK = "Unknown runtime error."

# Lines of a formatted traceback that never name the failure itself.
_FRAME_PREFIXES = (
    "Traceback ",
    "File ",
    "^",
    "~",
    "During handling of the above exception",
    "The above exception was the direct cause",
)


class Hint(str, Enum):
    MISSING_PACKAGE = "A required package is missing in this virtualenv. Reinstall dependencies and retry."
    MICROPHONE = "Microphone init failed. Check input device selection and app mic permissions."
    PLAYBACK = "Audio playback is unavailable. Install the Qt multimedia backend or disable --autoplay."
    SERVICE = "Translation service is unreachable. Check the network and --base-url."
    LOGS = "Check logs for full traceback."


def _clip(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[: max_len - 3].rstrip() + "..."
    return text


def _failure_line(traceback_text: str) -> str:
    lines = [ln.strip() for ln in traceback_text.splitlines() if ln.strip()]
    for ln in reversed(lines):
        if not ln.startswith(_FRAME_PREFIXES):
            return ln
    return lines[-1] if lines else ""


def summarize_exception(failure: Failure, *, max_len: int = 220) -> str:
    """One status-bar line for an exception object or a formatted traceback."""
    if isinstance(failure, BaseException):
        message = str(failure).strip().splitlines()
        name = type(failure).__name__
        line = f"{name}: {message[0]}" if message else name
    else:
        line = _failure_line(str(failure or ""))
    return _clip(line, max_len) if line else _FALLBACK


def _chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _hint_for_type(exc: BaseException) -> Hint | None:
    for item in _chain(exc):
        if isinstance(item, MicError):
            return Hint.MICROPHONE
        if isinstance(item, httpx.TransportError):
            return Hint.SERVICE
        if isinstance(item, ImportError):
            if "multimedia" in (item.name or "").lower():
                return Hint.PLAYBACK
            return Hint.MISSING_PACKAGE
    return None


def _hint_for_text(text: str) -> Hint:
    s = text.lower()
    if "no module named" in s:
        return Hint.MISSING_PACKAGE
    if "microphone" in s or "portaudio" in s or "sounddevice" in s:
        return Hint.MICROPHONE
    if "qtmultimedia" in s or "qmediaplayer" in s:
        return Hint.PLAYBACK
    if "connecterror" in s or "name or service not known" in s:
        return Hint.SERVICE
    return Hint.LOGS


def hint_for_exception(failure: Failure) -> str:
    if isinstance(failure, BaseException):
        hint = _hint_for_type(failure) or _hint_for_text(summarize_exception(failure))
    else:
        hint = _hint_for_text(str(failure or ""))
    return hint.value
