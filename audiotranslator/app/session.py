from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from audiotranslator.app.runtime import Job, _log_event, spawn_request_thread
from audiotranslator.app.state import RecordingState, RecordingStateTracker
from audiotranslator.audio.mic import MicError, SoundDeviceCapture
from audiotranslator.contracts import (
    AudioArtifact,
    ErrorKind,
    TranslationError,
    TranslationOutcome,
)
from audiotranslator.nlp.languages import LanguagePair
from audiotranslator.nlp.translator.base import Translator
from audiotranslator.ui.sink import ResultSink

Dispatcher = Callable[[Job], None]
Publisher = Callable[[TranslationOutcome], None]


class RecordingSession:
    """
    Idle <-> Recording state machine behind the microphone button.

    Stopping a recording returns to Idle at once and hands the artifact, with
    the language pair as it was at stop time, to a one-shot background job.
    Jobs cannot be awaited or cancelled; when several are outstanding each
    publishes on its own and the last one to finish is what the user sees.

    toggle(), shutdown() and the sink are UI-thread only. publish() is called
    from job threads and must be thread-safe (ResultBus.push in the app).
    """

    def __init__(
        self,
        capture: SoundDeviceCapture,
        languages: LanguagePair,
        translator: Translator,
        sink: ResultSink,
        *,
        publish: Optional[Publisher] = None,
        dispatch: Dispatcher = spawn_request_thread,
        logger: logging.Logger | None = None,
    ) -> None:
        self.capture = capture
        self.languages = languages
        self.translator = translator
        self.sink = sink
        self._publish = publish or sink.deliver
        self._dispatch = dispatch
        self._logger = logger or logging.getLogger(__name__)
        self._tracker = RecordingStateTracker()
        self._lock = threading.Lock()
        self._in_flight = 0

    @property
    def state(self) -> RecordingState:
        return self._tracker.state

    @property
    def is_recording(self) -> bool:
        return self._tracker.is_recording

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def toggle(self) -> RecordingState:
        if self._tracker.is_recording:
            self._stop()
        else:
            self._start()
        return self._tracker.state

    def _start(self) -> None:
        self.sink.clear_error()
        try:
            self.capture.start()
        except MicError as e:
            _log_event(self._logger, logging.WARNING, "recording_start_failed", detail=str(e))
            self.sink.deliver(TranslationError(ErrorKind.PERMISSION_DENIED, str(e)))
            return
        self._tracker.set_recording()
        _log_event(
            self._logger,
            logging.INFO,
            "recording_started",
            session=self._tracker.sessions_started,
        )

    def _stop(self) -> None:
        # Idle even if stop() fails.
        self._tracker.set_idle()
        try:
            artifact = self.capture.stop()
        except MicError as e:
            _log_event(self._logger, logging.WARNING, "recording_stop_failed", detail=str(e))
            self.sink.deliver(TranslationError(ErrorKind.EMPTY_SPEECH, str(e)))
            return

        languages = self.languages.snapshot()
        request_id = self._tracker.note_dispatched()
        with self._lock:
            self._in_flight += 1
        _log_event(
            self._logger,
            logging.INFO,
            "recording_stopped",
            request_id=request_id,
            chunks=artifact.chunk_count,
            source_language=languages.source.wire_code,
            target_language=languages.target.wire_code,
        )
        self._dispatch(lambda: self._run_request(request_id, artifact, languages))

    def _run_request(self, request_id: int, artifact: AudioArtifact, languages: LanguagePair) -> None:
        t0 = time.perf_counter()
        outcome: TranslationOutcome
        try:
            outcome = self.translator.translate(artifact, languages)
        except TranslationError as e:
            outcome = e
        except Exception as e:
            self._logger.exception("translate_crashed", extra={"request_id": request_id})
            outcome = TranslationError(ErrorKind.NETWORK_ERROR, repr(e))
        dur_ms = (time.perf_counter() - t0) * 1000.0

        with self._lock:
            self._in_flight -= 1
        if isinstance(outcome, TranslationError):
            _log_event(
                self._logger,
                logging.WARNING,
                "translate_failed",
                request_id=request_id,
                kind=outcome.kind.value,
                detail=outcome.detail,
                ms=round(dur_ms, 2),
            )
        else:
            _log_event(
                self._logger,
                logging.INFO,
                "translate_done",
                request_id=request_id,
                chars_original=len(outcome.original_text),
                chars_translated=len(outcome.translated_text),
                has_audio=bool(outcome.audio_url),
                ms=round(dur_ms, 2),
            )
        self._publish(outcome)

    def shutdown(self) -> None:
        if self._tracker.is_recording:
            self.capture.abort()
            self._tracker.set_idle()
            _log_event(self._logger, logging.INFO, "recording_aborted")
