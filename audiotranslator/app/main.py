from __future__ import annotations

import signal
import sys

from audiotranslator.app.config import resolve_args, save_language_selection
from audiotranslator.app.diagnostics import hint_for_exception, summarize_exception
from audiotranslator.app.logging_setup import setup_app_logger
from audiotranslator.app.runtime import _drain_result_bus
from audiotranslator.app.services import build_translator_services
from audiotranslator.app.session import RecordingSession
from audiotranslator.audio.mic import MicError, SoundDeviceCapture
from audiotranslator.ui.bridge import ResultBus
from audiotranslator.ui.sink import ResultSink


def main(argv: list[str] | None = None) -> int:
    args = resolve_args(argv)
    logger, log_dir, log_path = setup_app_logger(console=bool(args.debug))
    logger.info("app_start", extra={"config_path": str(getattr(args, "config", "")), "argv": argv or []})

    if args.list_devices:
        try:
            print(SoundDeviceCapture.list_devices())
        except MicError as e:
            print(f"{e}\nHint: {hint_for_exception(e)}")
            return 1
        return 0

    from PyQt6 import QtCore, QtWidgets
    from audiotranslator.app.main_window_qt import MainWindow
    from audiotranslator.ui.playback_qt import QtAudioPlayer

    app = QtWidgets.QApplication(sys.argv)

    services = build_translator_services(args)
    languages = services.languages
    main_window = MainWindow()

    player = None
    try:
        player = QtAudioPlayer(app)
    except Exception as e:
        logger.exception("playback_init_failed")
        main_window.set_status_text(f"Playback disabled: {summarize_exception(e)}. {hint_for_exception(e)}")

    sink = ResultSink(
        player=player.play if player is not None else None,
        on_change=main_window.show_display,
        autoplay=bool(args.autoplay),
    )
    bus = ResultBus(maxsize=max(1, int(args.queue_maxsize)))
    session = RecordingSession(
        services.capture,
        languages,
        services.translator,
        sink,
        publish=bus.push,
    )

    def _sync_languages() -> None:
        main_window.set_languages(languages.source, languages.target, languages.target_choices())

    def _remember_languages() -> None:
        try:
            save_language_selection(languages.source, languages.target, config_path=args.config)
        except OSError:
            logger.exception("language_selection_save_failed")

    def _on_source(value: str) -> None:
        languages.set_source(value)
        logger.info(
            "source_language_changed",
            extra={"source_language": languages.source.value, "target_language": languages.target.value},
        )
        _sync_languages()
        _remember_languages()

    def _on_target(value: str) -> None:
        languages.set_target(value)
        logger.info("target_language_changed", extra={"target_language": languages.target.value})
        _sync_languages()
        _remember_languages()

    def _on_mic() -> None:
        session.toggle()
        main_window.set_recording(session.is_recording)

    main_window.mic_toggle_requested.connect(_on_mic)
    main_window.source_selected.connect(_on_source)
    main_window.target_selected.connect(_on_target)

    timer = QtCore.QTimer()

    def _on_tick() -> None:
        _drain_result_bus(bus, sink, max(1, int(args.max_updates_per_tick)))
        main_window.set_meter_level(services.capture.level())

    timer.timeout.connect(_on_tick)
    timer.start(max(10, int(args.poll_ms)))

    def _on_about_to_quit() -> None:
        logger.info("app_quit", extra={"in_flight": session.in_flight})
        timer.stop()
        session.shutdown()
        services.translator.close()

    app.aboutToQuit.connect(_on_about_to_quit)
    signal.signal(signal.SIGINT, lambda *_: app.quit())

    _sync_languages()
    main_window.set_recording(False)
    if not main_window.status_label.text():
        main_window.set_status_text(f"Translator: {services.translator.name} | Logs: {log_path}")
    main_window.show()

    print("Audio Translator ready. Press the mic button to start and stop recording.")
    print(f"Logs: {log_dir}")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
