from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import TypeVar

from windns.domain.diagnostics import Diagnostic, Location
from windns.domain.json_types import JsonDict, as_json_dict
from windns.domain.result import Result

T = TypeVar("T")

RESULT_SCHEMA_VERSION = 1


def _serialize_location(location: Location | None) -> JsonDict | None:
    if location is None:
        return None
    return as_json_dict(asdict(location))


def serialize_diagnostic(diag: Diagnostic) -> JsonDict:
    return as_json_dict(
        {
            "id": diag.id,
            "code": diag.code,
            "rule": diag.rule,
            "severity": diag.severity.value,
            "message": diag.message,
            "hint": diag.hint,
            "details": diag.details,
            "is_execution": diag.is_execution,
            "location": _serialize_location(diag.location),
        }
    )


def serialize_result(result: Result[T], command: str, args: list[str]) -> JsonDict:
    failure = result.failure
    return as_json_dict(
        {
            "result_schema_version": RESULT_SCHEMA_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "args": args,
            "ok": result.ok,
            "failure": failure.code if failure is not None else None,
            "exit_code": result.exit_code,
            "diagnostics": [serialize_diagnostic(d) for d in result.diagnostics],
        }
    )


def format_diagnostic(diag: Diagnostic) -> str:
    """Human-readable form: summary line, then one indented line per detail."""
    lines = [f"{diag.severity.value}: {diag.message}"]
    lines.extend(f"    {line}" for line in diag.detail_lines)
    if diag.hint:
        lines.append(f"    hint: {diag.hint}")
    return "\n".join(lines)
