"""Wait/check/diagnose sequence applied after launching netsh."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable

from windns.adapters.errors import NetShError, NetShFailed, NetShTimeout
from windns.ports.notifier import NotifierPort
from windns.ports.process_runner import ProcessHandle

logger = logging.getLogger(__name__)

TOOL_NAME = "netsh"
DEFAULT_TIMEOUT_MS = 3000
CAPTURE_MAX_BYTES = 2048
CAPTURE_TIMEOUT_MS = 2000

Clock = Callable[[], float]

_LINE_BREAK = re.compile(r"[\r\n]+")


def monotonic_ms() -> float:
    return time.monotonic() * 1000


def effective_timeout(timeout_ms: int) -> int:
    return DEFAULT_TIMEOUT_MS if timeout_ms == 0 else timeout_ms


def block_to_rows(text: str) -> list[str]:
    return [row for row in _LINE_BREAK.split(text) if row]


def capture_details(handle: ProcessHandle, tool: str = TOOL_NAME) -> list[str]:
    details = [f"Failed to capture output from '{tool}'"]
    output, ok = handle.read_output(CAPTURE_MAX_BYTES, CAPTURE_TIMEOUT_MS)
    if ok and output:
        rows = block_to_rows(output)
        if rows:
            details = rows
    return details


def _fail(
    error: type[NetShError],
    message: str,
    handle: ProcessHandle,
    tool: str,
    terminate: bool,
    **extra: int,
) -> NetShError:
    details = capture_details(handle, tool)
    if terminate:
        handle.terminate()
    logger.debug("%s: %s", message, details)
    return error(message, details, **extra)


def validate_shell_out(
    handle: ProcessHandle,
    timeout_ms: int,
    notifier: NotifierPort,
    *,
    tool: str = TOOL_NAME,
    terminate_on_timeout: bool = False,
    clock: Clock = monotonic_ms,
) -> None:
    """Wait for ``handle`` and raise NetShError unless it exited cleanly in time.

    A timed-out process is left running unless ``terminate_on_timeout`` is set.
    Success that takes more than half the timeout is reported through
    ``notifier`` but is not an error.
    """
    actual_timeout = effective_timeout(timeout_ms)
    start = clock()

    exit_code, completed = handle.join(actual_timeout)

    if not completed:
        raise _fail(
            NetShTimeout,
            f"'{tool}' did not complete in a timely manner",
            handle,
            tool,
            terminate_on_timeout,
        )

    if exit_code != 0:
        raise _fail(
            NetShFailed,
            f"'{tool}' failed the requested operation. Error: {exit_code}",
            handle,
            tool,
            False,
            exit_code=int(exit_code or 0),
        )

    elapsed = int(clock() - start)
    if elapsed > actual_timeout // 2:
        notifier.notify(
            f"INFO: '{tool}' completed successfully, albeit a little slowly. "
            f"It consumed {elapsed} ms of {actual_timeout} ms max permitted execution time"
        )
