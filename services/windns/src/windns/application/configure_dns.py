from __future__ import annotations

import logging
from collections.abc import Callable

from windns.adapters.errors import LaunchError, NetShError, NetShFailed, NetShTimeout
from windns.application.netsh import NetSh
from windns.domain.addresses import (
    MAX_SERVERS_PER_FAMILY,
    split_by_family,
    validate_interface_index,
    validate_server,
    validate_server_family,
    validate_timeout,
)
from windns.domain.commands import AddressFamily
from windns.domain.diagnostics import Diagnostic, Severity, ValueLocation
from windns.domain.json_types import as_json_dict
from windns.domain.result import Result

logger = logging.getLogger(__name__)


def launch_diagnostic(error: LaunchError) -> Diagnostic:
    lines = [str(error.cause)] if error.cause is not None else [error.message]
    return Diagnostic(
        code="NETSH_LAUNCH_FAILED",
        rule="netsh.launch",
        severity=Severity.ERROR,
        message=error.message,
        hint=error.hint,
        details=as_json_dict({"lines": lines}),
        is_execution=True,
    )


def netsh_diagnostic(error: NetShError) -> Diagnostic:
    if isinstance(error, NetShTimeout):
        code, rule = "NETSH_TIMEOUT", "netsh.timeout"
        details: dict[str, object] = {"lines": error.details}
    elif isinstance(error, NetShFailed):
        code, rule = "NETSH_FAILED", "netsh.exit_code"
        details = {"lines": error.details, "exit_code": error.exit_code}
    else:
        code, rule = "NETSH_FAILED", "netsh.exit_code"
        details = {"lines": error.details}
    return Diagnostic(
        code=code,
        rule=rule,
        severity=Severity.ERROR,
        message=error.message,
        details=as_json_dict(details),
        is_execution=True,
    )


def run_operation(call: Callable[[], None]) -> Result[None]:
    try:
        call()
    except LaunchError as e:
        logger.debug("netsh could not be started: %s", e)
        return Result(diagnostics=[launch_diagnostic(e)])
    except NetShError as e:
        return Result(diagnostics=[netsh_diagnostic(e)])
    return Result()


def set_server(
    netsh: NetSh,
    family: AddressFamily,
    interface_index: int,
    server: str,
    secondary: bool = False,
    timeout: int = 0,
) -> Result[None]:
    diagnostics = validate_interface_index(interface_index)
    diagnostics.extend(validate_timeout(timeout))
    diagnostics.extend(validate_server_family(server, family))
    if diagnostics:
        return Result(diagnostics=diagnostics)
    if secondary:
        return run_operation(
            lambda: netsh.set_secondary_dns(family, interface_index, server.strip(), timeout)
        )
    return run_operation(
        lambda: netsh.set_primary_dns(family, interface_index, server.strip(), timeout)
    )


def set_dhcp(
    netsh: NetSh, family: AddressFamily, interface_index: int, timeout: int = 0
) -> Result[None]:
    diagnostics = validate_interface_index(interface_index)
    diagnostics.extend(validate_timeout(timeout))
    if diagnostics:
        return Result(diagnostics=diagnostics)
    return run_operation(lambda: netsh.set_dhcp(family, interface_index, timeout))


def _apply_family(
    netsh: NetSh,
    family: AddressFamily,
    interface_index: int,
    servers: list[str],
    timeout: int,
) -> Result[None]:
    if not servers:
        return run_operation(lambda: netsh.set_dhcp(family, interface_index, timeout))
    primary = run_operation(
        lambda: netsh.set_primary_dns(family, interface_index, servers[0], timeout)
    )
    if not primary.ok or len(servers) < 2:
        return primary
    return run_operation(
        lambda: netsh.set_secondary_dns(family, interface_index, servers[1], timeout)
    )


def set_dns_servers(
    netsh: NetSh,
    interface_index: int,
    servers: list[str],
    timeout: int = 0,
    strict: bool = False,
) -> Result[None]:
    """Point both address families of an interface at ``servers``.

    The first server of a family becomes its primary and the second its
    secondary. A family without servers goes back to DHCP. Extra servers
    are ignored with a warning, or refused outright when ``strict`` is set.
    """
    diagnostics = validate_interface_index(interface_index)
    diagnostics.extend(validate_timeout(timeout))
    for server in servers:
        diagnostics.extend(validate_server(server))
    if diagnostics:
        return Result(diagnostics=diagnostics)

    grouped = split_by_family(servers)
    for family, family_servers in grouped.items():
        extra = family_servers[MAX_SERVERS_PER_FAMILY:]
        if extra:
            diagnostics.append(
                Diagnostic(
                    code="DNS_SERVERS_TRUNCATED",
                    rule="input.server.count",
                    severity=Severity.ERROR if strict else Severity.WARN,
                    message=(
                        f"Only {MAX_SERVERS_PER_FAMILY} {family.value} servers are used; "
                        f"ignoring {', '.join(extra)}"
                    ),
                    location=ValueLocation("server", extra[0]),
                )
            )
    if any(d.severity == Severity.ERROR for d in diagnostics):
        return Result(diagnostics=diagnostics)

    logger.info(
        "Setting DNS servers on interface %s - %s",
        interface_index,
        ", ".join(servers) or "DHCP",
    )
    for family in (AddressFamily.IPV4, AddressFamily.IPV6):
        outcome = _apply_family(
            netsh,
            family,
            interface_index,
            grouped[family][:MAX_SERVERS_PER_FAMILY],
            timeout,
        )
        diagnostics.extend(outcome.diagnostics)
        if not outcome.ok:
            break
    return Result(diagnostics=diagnostics)


def reset_dns(netsh: NetSh, interface_index: int, timeout: int = 0) -> Result[None]:
    """Hand DNS configuration for both families back to DHCP."""
    return set_dns_servers(netsh, interface_index, [], timeout=timeout)
