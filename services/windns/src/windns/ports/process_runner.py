from pathlib import Path
from types import TracebackType
from typing import Protocol


class ProcessHandle(Protocol):
    def join(self, timeout_ms: int) -> tuple[int | None, bool]: ...

    def read_output(self, max_bytes: int, timeout_ms: int) -> tuple[str, bool]: ...

    def terminate(self) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> "ProcessHandle": ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class ProcessRunnerPort(Protocol):
    def start(self, executable: Path, arguments: str) -> ProcessHandle: ...
