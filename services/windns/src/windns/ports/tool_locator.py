from pathlib import Path
from typing import Protocol


class ToolLocatorPort(Protocol):
    def resolve_path(self) -> Path: ...
