from __future__ import annotations

import codecs
import locale
import logging
import os
import shlex
import subprocess
import sys
import threading
from pathlib import Path
from types import TracebackType

from windns.adapters.errors import LaunchError
from windns.domain.json_types import as_json_dict

logger = logging.getLogger(__name__)

_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


def _command_line(executable: Path, arguments: str) -> str | list[str]:
    if sys.platform == "win32":
        return f'"{executable}" {arguments}'
    return [str(executable), *shlex.split(arguments)]


class SubprocessHandle:
    """One running process with stdout and stderr merged into a single pipe."""

    def __init__(self, process: subprocess.Popen[bytes], encoding: str | None = None) -> None:
        self._process = process
        self._encoding = encoding or locale.getpreferredencoding(False)

    def join(self, timeout_ms: int) -> tuple[int | None, bool]:
        try:
            exit_code = self._process.wait(timeout=timeout_ms / 1000)
        except subprocess.TimeoutExpired:
            return None, False
        return exit_code, True

    def read_output(self, max_bytes: int, timeout_ms: int) -> tuple[str, bool]:
        stream = self._process.stdout
        if stream is None or stream.closed:
            return "", False
        fd = stream.fileno()
        chunks: list[bytes] = []

        def _read() -> None:
            try:
                chunks.append(os.read(fd, max_bytes))
            except (OSError, ValueError) as e:
                logger.debug("Output read failed: %s", e)

        # The reader is abandoned if nothing arrives in time.
        reader = threading.Thread(target=_read, name="windns-output-reader", daemon=True)
        reader.start()
        reader.join(timeout_ms / 1000)
        if reader.is_alive() or not chunks or not chunks[0]:
            return "", False
        return chunks[0].decode(self._encoding, errors="replace"), True

    def terminate(self) -> None:
        if self._process.poll() is not None:
            return
        logger.warning("Terminating unresponsive process %s", self._process.pid)
        try:
            self._process.kill()
        except OSError as e:
            logger.warning("Could not terminate process %s: %s", self._process.pid, e)

    def close(self) -> None:
        if self._process.stdout is not None and not self._process.stdout.closed:
            try:
                self._process.stdout.close()
            except OSError:
                pass
        if self._process.poll() is None:
            logger.debug("Leaving process %s running after close", self._process.pid)

    def __enter__(self) -> SubprocessHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class SubprocessRunner:
    def __init__(self, encoding: str | None = None) -> None:
        # Unknown codecs raise LookupError here, before any process starts.
        self.encoding = codecs.lookup(encoding).name if encoding else None

    def start(self, executable: Path, arguments: str) -> SubprocessHandle:
        command = _command_line(executable, arguments)
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                creationflags=_NO_WINDOW,
            )
        except OSError as e:
            raise LaunchError(
                f"Failed to start '{executable.name}'",
                details=as_json_dict({"executable": str(executable), "arguments": arguments}),
                cause=e,
            ) from e
        logger.debug("Started %s (pid %s)", executable, process.pid)
        return SubprocessHandle(process, encoding=self.encoding)
