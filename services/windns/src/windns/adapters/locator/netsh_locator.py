from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path, PureWindowsPath

from windns.adapters.errors import ToolLocationError

NETSH_EXE = "netsh.exe"


class NetShLocator:
    """Resolves ``<system folder>\\netsh.exe`` once and caches it."""

    def __init__(
        self,
        override: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.override = override
        self._environ = environ if environ is not None else os.environ
        self._path: Path | None = None

    def _system_folder(self) -> str:
        for var in ("SystemRoot", "windir"):
            root = self._environ.get(var) or self._environ.get(var.upper())
            if root:
                return str(PureWindowsPath(root) / "System32")
        raise ToolLocationError(
            "Could not locate the system folder",
            hint="Set SystemRoot or configure netsh_path explicitly",
        )

    def resolve_path(self) -> Path:
        if self._path is None:
            if self.override is not None:
                self._path = self.override
            else:
                self._path = Path(str(PureWindowsPath(self._system_folder()) / NETSH_EXE))
        return self._path
