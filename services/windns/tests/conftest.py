from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from windns.application.netsh import NetSh

NETSH_PATH = Path(r"C:\Windows\System32\netsh.exe")


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@dataclass
class FakeHandle:
    clock: FakeClock
    exit_code: int | None = 0
    completed: bool = True
    elapsed_ms: int = 0
    output: str | None = None
    joins: list[int] = field(default_factory=list)
    reads: list[tuple[int, int]] = field(default_factory=list)
    terminated: bool = False
    closed: bool = False

    def join(self, timeout_ms: int) -> tuple[int | None, bool]:
        self.joins.append(timeout_ms)
        self.clock.now += min(self.elapsed_ms, timeout_ms)
        if not self.completed:
            return None, False
        return self.exit_code, True

    def read_output(self, max_bytes: int, timeout_ms: int) -> tuple[str, bool]:
        self.reads.append((max_bytes, timeout_ms))
        if self.output is None:
            return "", False
        return self.output[:max_bytes], True

    def terminate(self) -> None:
        self.terminated = True

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeHandle:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class FakeRunner:
    """Hands out queued handles and records every command line."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.queued: list[FakeHandle] = []
        self.started: list[tuple[Path, str]] = []
        self.handles: list[FakeHandle] = []

    def queue(self, **kwargs: object) -> FakeHandle:
        handle = FakeHandle(self.clock, **kwargs)  # type: ignore[arg-type]
        self.queued.append(handle)
        return handle

    def start(self, executable: Path, arguments: str) -> FakeHandle:
        self.started.append((executable, arguments))
        handle = self.queued.pop(0) if self.queued else FakeHandle(self.clock)
        self.handles.append(handle)
        return handle

    @property
    def arguments(self) -> list[str]:
        return [args for _, args in self.started]


class FakeLocator:
    def __init__(self, path: Path = NETSH_PATH) -> None:
        self.path = path
        self.calls = 0

    def resolve_path(self) -> Path:
        self.calls += 1
        return self.path


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def runner(clock: FakeClock) -> FakeRunner:
    return FakeRunner(clock)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def netsh(runner: FakeRunner, notifier: RecordingNotifier, clock: FakeClock) -> NetSh:
    return NetSh(runner=runner, locator=FakeLocator(), notifier=notifier, clock=clock)
