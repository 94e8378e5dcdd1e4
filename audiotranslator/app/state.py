from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecordingState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


@dataclass
class RecordingStateTracker:
    state: RecordingState = RecordingState.IDLE
    sessions_started: int = 0
    requests_dispatched: int = 0

    @property
    def is_recording(self) -> bool:
        return self.state == RecordingState.RECORDING

    def set_recording(self) -> None:
        self.state = RecordingState.RECORDING
        self.sessions_started += 1

    def set_idle(self) -> None:
        self.state = RecordingState.IDLE

    def note_dispatched(self) -> int:
        self.requests_dispatched += 1
        return self.requests_dispatched
