from __future__ import annotations

import queue
from typing import Optional

from audiotranslator.contracts import TranslationOutcome


class ResultBus:
    """
    Thread-safe handoff from request threads -> UI thread.
    Request threads push outcomes. UI polls (non-blocking).
    """
    def __init__(self, maxsize: int = 16):
        self.q: "queue.Queue[TranslationOutcome]" = queue.Queue(maxsize=maxsize)

    def push(self, outcome: TranslationOutcome) -> None:
        try:
            self.q.put_nowait(outcome)
        except queue.Full:
            # drop oldest; only the newest outcome ends up displayed anyway
            try:
                _ = self.q.get_nowait()
            except queue.Empty:
                return
            try:
                self.q.put_nowait(outcome)
            except queue.Full:
                return

    def pop(self) -> Optional[TranslationOutcome]:
        try:
            return self.q.get_nowait()
        except queue.Empty:
            return None
