from __future__ import annotations

import ipaddress

from windns.domain.commands import AddressFamily
from windns.domain.diagnostics import Diagnostic, Severity, ValueLocation

MAX_SERVERS_PER_FAMILY = 2


def address_family(server: str) -> AddressFamily | None:
    try:
        parsed = ipaddress.ip_address(server.strip())
    except ValueError:
        return None
    return AddressFamily.IPV4 if parsed.version == 4 else AddressFamily.IPV6


def validate_interface_index(interface_index: int) -> list[Diagnostic]:
    if isinstance(interface_index, int) and not isinstance(interface_index, bool) and interface_index > 0:
        return []
    return [
        Diagnostic(
            code="INTERFACE_INDEX_INVALID",
            rule="input.interface.index",
            severity=Severity.ERROR,
            message=f"Invalid interface index: {interface_index}",
            location=ValueLocation("interface", str(interface_index)),
        )
    ]


def validate_server(server: str) -> list[Diagnostic]:
    if address_family(server) is not None:
        return []
    return [
        Diagnostic(
            code="DNS_SERVER_INVALID",
            rule="input.server.address",
            severity=Severity.ERROR,
            message=f"Not an IP address: {server}",
            location=ValueLocation("server", server),
        )
    ]


def validate_server_family(server: str, family: AddressFamily) -> list[Diagnostic]:
    diagnostics = validate_server(server)
    if diagnostics:
        return diagnostics
    actual = address_family(server)
    if actual == family:
        return []
    return [
        Diagnostic(
            code="DNS_SERVER_FAMILY_MISMATCH",
            rule="input.server.family",
            severity=Severity.ERROR,
            message=f"{server} is not an {family.value} address",
            location=ValueLocation("server", server),
        )
    ]


def split_by_family(servers: list[str]) -> dict[AddressFamily, list[str]]:
    """Group valid servers by family, keeping their relative order."""
    grouped: dict[AddressFamily, list[str]] = {
        AddressFamily.IPV4: [],
        AddressFamily.IPV6: [],
    }
    for server in servers:
        family = address_family(server)
        if family is not None:
            grouped[family].append(server.strip())
    return grouped


def validate_timeout(timeout_ms: int) -> list[Diagnostic]:
    if timeout_ms >= 0:
        return []
    return [
        Diagnostic(
            code="TIMEOUT_INVALID",
            rule="input.timeout",
            severity=Severity.ERROR,
            message=f"Timeout must be 0 or more milliseconds: {timeout_ms}",
            location=ValueLocation("timeout", str(timeout_ms)),
        )
    ]
