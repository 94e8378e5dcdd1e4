from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from audiotranslator.audio.chunks import ChunkBuffer, pack_wav, rms_level
from audiotranslator.contracts import AudioArtifact

logger = logging.getLogger(__name__)

StreamFactory = Callable[[Callable[..., None]], Any]


class MicError(RuntimeError):
    pass


class SoundDeviceCapture:
    """
    Toggle-driven microphone capture using the `sounddevice` package (PortAudio).

    start() opens a callback stream that appends raw PCM16 blocks to a
    ChunkBuffer; stop() releases the device and packs every block, in arrival
    order, into one WAV AudioArtifact. At most one stream is open at a time.
    """

    def __init__(
        self,
        *,
        sample_rate: int = 16000,
        channels: int = 1,
        device: Optional[int] = None,
        stream_factory: Optional[StreamFactory] = None,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError("sample_rate must be > 0")
        if channels not in (1, 2):
            raise ValueError("channels must be 1 or 2 (for now)")

        self.sample_rate = int(sample_rate)
        self.channels = int(channels)
        self.device = device
        self._stream_factory = stream_factory or self._open_stream
        self._buffer = ChunkBuffer()
        self._stream: Any = None
        self._level = 0

    @staticmethod
    def list_devices() -> str:
        try:
            import sounddevice as sd
        except ImportError as e:
            raise MicError(
                "sounddevice is not installed. Install with: python -m pip install sounddevice"
            ) from e
        return str(sd.query_devices())

    @property
    def active(self) -> bool:
        return self._stream is not None

    def level(self) -> int:
        return self._level if self.active else 0

    def _open_stream(self, callback: Callable[..., None]) -> Any:
        try:
            import sounddevice as sd
        except ImportError as e:
            raise MicError(
                "sounddevice is not installed. Install with: python -m pip install sounddevice"
            ) from e

        return sd.RawInputStream(
            samplerate=self.sample_rate,
            channels=self.channels,
            dtype="int16",
            device=self.device,
            blocksize=0,  # let PortAudio choose
            callback=callback,
        )

    def _on_block(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if status:
            # Overflow only means PortAudio dropped frames; keep recording.
            logger.debug("mic_stream_status", extra={"status": str(status)})
        block = bytes(indata)
        self._buffer.append(block)
        self._level = rms_level(block)

    def start(self) -> None:
        if self._stream is not None:
            raise MicError("capture already active")
        self._buffer.clear()
        self._level = 0

        stream = None
        try:
            stream = self._stream_factory(self._on_block)
            stream.start()
        except MicError:
            self._close_quietly(stream)
            raise
        except Exception as e:
            self._close_quietly(stream)
            raise MicError(
                "Failed to open microphone stream. "
                "Check microphone permissions or pick a device with --device."
            ) from e

        self._stream = stream
        logger.info(
            "mic_opened",
            extra={"sample_rate": self.sample_rate, "channels": self.channels, "device": self.device},
        )

    def stop(self) -> AudioArtifact:
        stream = self._stream
        if stream is None:
            raise MicError("no active capture")
        self._stream = None
        try:
            # stop() waits for pending callbacks, so no block is lost.
            stream.stop()
        except Exception as e:
            self._buffer.clear()
            raise MicError("Failed to stop microphone stream.") from e
        finally:
            self._close_quietly(stream)

        chunks = self._buffer.drain()
        pcm16 = b"".join(chunks)
        artifact = AudioArtifact(
            data=pack_wav(pcm16, self.sample_rate, self.channels),
            sample_rate=self.sample_rate,
            channels=self.channels,
            chunk_count=len(chunks),
        )
        logger.info(
            "mic_closed",
            extra={"chunks": len(chunks), "bytes": len(artifact.data), "seconds": round(artifact.duration, 2)},
        )
        return artifact

    def abort(self) -> None:
        stream = self._stream
        self._stream = None
        self._buffer.clear()
        if stream is None:
            return
        try:
            stream.abort()
        except Exception:
            logger.exception("mic_abort_failed")
        finally:
            self._close_quietly(stream)
        logger.info("mic_aborted")

    @staticmethod
    def _close_quietly(stream: Any) -> None:
        if stream is None:
            return
        try:
            stream.close()
        except Exception:
            logger.exception("mic_close_failed")
