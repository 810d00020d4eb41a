from dataclasses import dataclass, field

from windns.domain.json_types import JsonDict


@dataclass
class AdapterError(Exception):
    message: str
    details: JsonDict | None = None
    hint: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


class LaunchError(AdapterError):
    pass


class ToolLocationError(LaunchError):
    pass


class SettingsError(AdapterError):
    pass


@dataclass
class NetShError(Exception):
    """netsh ran but the requested operation did not succeed.

    ``details`` holds the lines captured from netsh's output, or a single
    fallback line when nothing could be captured. It is never empty.
    """

    message: str
    details: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.details:
            raise ValueError("NetShError requires at least one detail line")

    def __str__(self) -> str:
        return self.message


class NetShTimeout(NetShError):
    pass


@dataclass
class NetShFailed(NetShError):
    exit_code: int = 0
