from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from windns.domain.diagnostics import Diagnostic, Severity

T = TypeVar("T")


def _new_diagnostics() -> list[Diagnostic]:
    return []


@dataclass
class Result(Generic[T]):
    value: T | None = None
    diagnostics: list[Diagnostic] = field(default_factory=_new_diagnostics)

    @property
    def ok(self) -> bool:
        return not any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def failure(self) -> Diagnostic | None:
        """First error diagnostic, if any. Callers match on its ``code``."""
        for d in self.diagnostics:
            if d.severity == Severity.ERROR:
                return d
        return None

    @property
    def exit_code(self) -> int:
        has_exec = any(
            d.is_execution and d.severity == Severity.ERROR for d in self.diagnostics
        )
        has_val = any(
            (not d.is_execution) and d.severity == Severity.ERROR
            for d in self.diagnostics
        )
        if has_exec:
            return 3
        if has_val:
            return 2
        return 0
