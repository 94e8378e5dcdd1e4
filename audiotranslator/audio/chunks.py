from __future__ import annotations

import io
import threading
import wave
from typing import List

import numpy as np


class ChunkBuffer:
    """
    Ordered PCM16 blocks handed over from the PortAudio callback thread.
    Blocks are kept in arrival order; drain() empties the buffer.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: List[bytes] = []

    def append(self, chunk: bytes) -> None:
        if not chunk:
            return
        with self._lock:
            self._chunks.append(bytes(chunk))

    def drain(self) -> List[bytes]:
        with self._lock:
            out = self._chunks
            self._chunks = []
        return out

    def clear(self) -> None:
        with self._lock:
            self._chunks = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)


def pack_wav(pcm16: bytes, sample_rate: int, channels: int) -> bytes:
    out = io.BytesIO()
    with wave.open(out, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm16)
    return out.getvalue()


def rms_level(pcm16: bytes) -> int:
    """Map the RMS of a PCM16 block onto 0..100 for a level meter."""
    x = np.frombuffer(pcm16[: len(pcm16) - (len(pcm16) % 2)], dtype=np.int16).astype(np.float32)
    if not x.size:
        return 0
    rms = float(np.sqrt(np.mean(x * x)))
    return max(0, min(100, int(round(rms / 3000.0 * 100.0))))
