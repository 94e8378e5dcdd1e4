from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

@dataclass(frozen=True)
class AudioArtifact:
    """
    Finalized audio of one recording session, ready to upload.
    data: complete container bytes (WAV header + PCM16 frames).
    """
    data: bytes
    mime_type: str = "audio/wav"
    filename: str = "recording.wav"
    sample_rate: int = 16000
    channels: int = 1
    chunk_count: int = 0

    @property
    def duration(self) -> float:
        # 44-byte RIFF header, 2 bytes per sample
        frames = max(0, len(self.data) - 44) // (2 * max(1, self.channels))
        return frames / float(self.sample_rate) if self.sample_rate > 0 else 0.0

@dataclass(frozen=True)
class TranslationResult:
    original_text: str
    translated_text: str
    audio_url: Optional[str] = None
    provider: str = "http"


class ErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    EMPTY_SPEECH = "empty_speech"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"


# Network failures share the "speak again" prompt on purpose.
USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.PERMISSION_DENIED: "⚠️ Microphone unavailable, check permissions...",
    ErrorKind.EMPTY_SPEECH: "⚠️ Speak Again...",
    ErrorKind.SERVER_ERROR: "⚠️ Server Error, Try Again...",
    ErrorKind.NETWORK_ERROR: "⚠️ Speak Again...",
}


class TranslationError(RuntimeError):
    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = ErrorKind(kind)
        self.message = USER_MESSAGES[self.kind]
        self.detail = detail
        super().__init__(detail or self.message)


TranslationOutcome = Union[TranslationResult, TranslationError]
