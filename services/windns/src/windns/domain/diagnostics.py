from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import hashlib
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


@dataclass(frozen=True)
class FileLocation:
    path: str
    line: int | None = None
    kind: str = field(default="file", init=False)


@dataclass(frozen=True)
class ValueLocation:
    field: str
    value: str
    kind: str = field(default="value", init=False)


Location = FileLocation | ValueLocation


@dataclass(frozen=True)
class Diagnostic:
    code: str
    rule: str
    severity: Severity
    message: str
    location: Location | None = None
    hint: str | None = None
    details: dict[str, Any] | None = None
    is_execution: bool = False
    id: str = field(init=False)

    def __post_init__(self) -> None:
        raw = f"{self.code}|{self.rule}|{self.severity}|{self.message}|{self.location}"
        object.__setattr__(self, "id", hashlib.sha256(raw.encode()).hexdigest()[:12])

    @property
    def detail_lines(self) -> list[str]:
        """Captured tool output, when the diagnostic carries any."""
        lines = (self.details or {}).get("lines")
        if isinstance(lines, list):
            return [str(line) for line in lines]
        return []
