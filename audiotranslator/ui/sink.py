from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from audiotranslator.contracts import ErrorKind, TranslationError, TranslationOutcome, TranslationResult

logger = logging.getLogger(__name__)

Player = Callable[[str], None]
ChangeListener = Callable[["DisplayState"], None]


@dataclass(frozen=True)
class DisplayState:
    original_text: str = ""
    translated_text: str = ""
    error_message: str = ""
    error_kind: Optional[ErrorKind] = None
    audio_url: Optional[str] = None


class ResultSink:
    """
    Owner of everything the user sees about translation outcomes.

    Every delivery replaces the displayed state as a whole. A result swaps in
    both texts and clears the error; an error only replaces the message and
    leaves the previous texts in place.
    """

    def __init__(
        self,
        *,
        player: Optional[Player] = None,
        on_change: Optional[ChangeListener] = None,
        autoplay: bool = True,
    ) -> None:
        self._player = player
        self._on_change = on_change
        self.autoplay = autoplay
        self._state = DisplayState()

    @property
    def state(self) -> DisplayState:
        return self._state

    def clear_error(self) -> None:
        if not self._state.error_message:
            return
        self._state = replace(self._state, error_message="", error_kind=None)
        self._notify()

    def deliver(self, outcome: TranslationOutcome) -> None:
        if isinstance(outcome, TranslationError):
            logger.info(
                "result_error",
                extra={"kind": outcome.kind.value, "detail": outcome.detail},
            )
            self._state = replace(self._state, error_message=outcome.message, error_kind=outcome.kind)
            self._notify()
            return

        if not isinstance(outcome, TranslationResult):
            raise TypeError(f"unsupported outcome: {type(outcome).__name__}")

        self._state = DisplayState(
            original_text=outcome.original_text,
            translated_text=outcome.translated_text,
            error_message="",
            error_kind=None,
            audio_url=outcome.audio_url,
        )
        self._notify()
        if outcome.audio_url and self.autoplay:
            self._play(outcome.audio_url)

    def _play(self, url: str) -> None:
        if self._player is None:
            return
        logger.info("playback_started", extra={"audio_url": url})
        try:
            self._player(url)
        except Exception:
            logger.exception("playback_failed", extra={"audio_url": url})

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._state)
