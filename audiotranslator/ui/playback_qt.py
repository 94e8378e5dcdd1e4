from __future__ import annotations

import logging

from PyQt6 import QtCore
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer

logger = logging.getLogger(__name__)


class QtAudioPlayer(QtCore.QObject):
    """Streams translated speech from a URL. A new play() replaces the current clip."""

    def __init__(self, parent: QtCore.QObject | None = None, volume: float = 1.0) -> None:
        super().__init__(parent)
        self._output = QAudioOutput(self)
        self._output.setVolume(max(0.0, min(1.0, float(volume))))
        self._player = QMediaPlayer(self)
        self._player.setAudioOutput(self._output)
        self._player.errorOccurred.connect(self._on_error)

    def play(self, url: str) -> None:
        self._player.stop()
        self._player.setSource(QtCore.QUrl(url))
        self._player.play()

    def stop(self) -> None:
        self._player.stop()

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        logger.warning(
            "playback_error",
            extra={"error": str(error), "detail": message, "audio_url": self._player.source().toString()},
        )
