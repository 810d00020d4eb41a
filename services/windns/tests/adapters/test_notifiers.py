import logging

from windns.adapters.notifier.notifiers import (
    NOTIFY_LOGGER,
    CallbackNotifier,
    LoggingNotifier,
    NullNotifier,
)


def test_logging_notifier_logs_at_info(caplog):
    with caplog.at_level(logging.INFO, logger=NOTIFY_LOGGER):
        LoggingNotifier().notify("INFO: slow")
    assert [r.getMessage() for r in caplog.records] == ["INFO: slow"]
    assert caplog.records[0].levelno == logging.INFO


def test_callback_notifier_forwards():
    seen: list[str] = []
    CallbackNotifier(seen.append).notify("INFO: slow")
    assert seen == ["INFO: slow"]


def test_null_notifier_accepts_messages():
    assert NullNotifier().notify("INFO: slow") is None
