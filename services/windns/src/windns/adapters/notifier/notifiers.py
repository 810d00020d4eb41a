from __future__ import annotations

import logging
from collections.abc import Callable

NOTIFY_LOGGER = "windns.notify"


class LoggingNotifier:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(NOTIFY_LOGGER)

    def notify(self, message: str) -> None:
        self.logger.info(message)


class CallbackNotifier:
    def __init__(self, sink: Callable[[str], None]) -> None:
        self.sink = sink

    def notify(self, message: str) -> None:
        self.sink(message)


class NullNotifier:
    def notify(self, message: str) -> None:
        return None
