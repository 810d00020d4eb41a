from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, replace
from pathlib import Path

from windns.adapters.config.settings_file import load_settings_file, validate_settings_schema
from windns.adapters.errors import SettingsError
from windns.domain.diagnostics import Diagnostic, FileLocation, Severity
from windns.domain.result import Result

CONFIG_ENV = "WINDNS_CONFIG"
DEFAULT_CONFIG_NAME = "windns.yaml"


@dataclass(frozen=True)
class Settings:
    netsh_path: Path | None = None
    timeout_ms: int = 0
    terminate_on_timeout: bool = False
    output_encoding: str | None = None


def _known_codec(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def find_settings_path(explicit: Path | None = None) -> Path | None:
    if explicit is not None:
        return explicit
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None = None) -> Result[Settings]:
    """Load settings from ``path`` or the default locations.

    Missing default files mean built-in defaults. A file that was asked for
    explicitly but cannot be read is an error.
    """
    settings_path = find_settings_path(path)
    if settings_path is None:
        return Result(value=Settings())
    location = FileLocation(str(settings_path))
    try:
        raw = load_settings_file(settings_path)
    except SettingsError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="SETTINGS_PARSE_FAILED",
                    rule="settings.parse",
                    severity=Severity.ERROR,
                    message=str(e.cause or e),
                    location=location,
                )
            ]
        )
    errors = validate_settings_schema(raw)
    output_encoding = raw.get("output_encoding")
    if isinstance(output_encoding, str) and not _known_codec(output_encoding):
        errors.append(f"Unknown output_encoding: {output_encoding}")
    if errors:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="SETTINGS_SCHEMA_INVALID",
                    rule="settings.schema",
                    severity=Severity.ERROR,
                    message=message,
                    location=location,
                )
                for message in errors
            ]
        )
    netsh_path = raw.get("netsh_path")
    timeout_ms = raw.get("timeout_ms", 0)
    return Result(
        value=Settings(
            netsh_path=Path(str(netsh_path)) if netsh_path else None,
            timeout_ms=int(timeout_ms) if isinstance(timeout_ms, (int, float)) else 0,
            terminate_on_timeout=bool(raw.get("terminate_on_timeout", False)),
            output_encoding=str(output_encoding) if output_encoding else None,
        )
    )


def merge_overrides(
    settings: Settings,
    timeout_ms: int | None = None,
    netsh_path: Path | None = None,
    terminate_on_timeout: bool | None = None,
) -> Settings:
    merged = settings
    if timeout_ms is not None:
        merged = replace(merged, timeout_ms=timeout_ms)
    if netsh_path is not None:
        merged = replace(merged, netsh_path=netsh_path)
    if terminate_on_timeout is not None:
        merged = replace(merged, terminate_on_timeout=terminate_on_timeout)
    return merged
