from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from audiotranslator.ui.bridge import ResultBus
from audiotranslator.ui.sink import ResultSink

Job = Callable[[], None]


def _drain_result_bus(bus: ResultBus, sink: ResultSink, max_items: int) -> int:
    drained = 0
    while drained < max_items:
        outcome = bus.pop()
        if outcome is None:
            break
        sink.deliver(outcome)
        drained += 1
    return drained


def _log_event(logger: logging.Logger | None, level: int, event: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.log(level, event, extra=fields)


def spawn_request_thread(job: Job) -> None:
    """Run one translation job in the background. There is no handle to join or cancel it."""
    threading.Thread(
        target=job,
        name="audiotranslator-request",
        daemon=True,
    ).start()
