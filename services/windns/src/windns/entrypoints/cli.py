from pathlib import Path
import json
import logging
import sys
from typing import NoReturn, TypeVar

import typer

from windns.adapters.locator.netsh_locator import NetShLocator
from windns.adapters.notifier.notifiers import LoggingNotifier
from windns.adapters.process.subprocess_runner import SubprocessRunner
from windns.application.configure_dns import reset_dns, set_dhcp, set_dns_servers, set_server
from windns.application.netsh import NetSh
from windns.application.result_serialization import format_diagnostic, serialize_result
from windns.application.settings import Settings, load_settings, merge_overrides
from windns.domain.commands import AddressFamily
from windns.domain.result import Result

T = TypeVar("T")

app = typer.Typer(add_completion=False, help="Configure interface DNS servers through netsh.")

INTERFACE = typer.Option(..., "--interface", "-i", help="Interface index")
FAMILY = typer.Option(AddressFamily.IPV4, "--family", "-f")
TIMEOUT = typer.Option(None, "--timeout", min=0, help="Milliseconds per netsh call, 0 for default")
CONFIG = typer.Option(None, "--config", "-c", dir_okay=False)
NETSH = typer.Option(None, "--netsh", help="Path to netsh.exe")
TERMINATE = typer.Option(
    None,
    "--terminate-on-timeout/--leave-on-timeout",
    help="Kill netsh when it times out instead of leaving it running",
)
JSON_OUTPUT = typer.Option(False, "--json")
VERBOSE = typer.Option(False, "--verbose", "-v")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _report(result: Result[T], command: str, args: list[str], json_output: bool) -> NoReturn:
    if json_output:
        typer.echo(json.dumps(serialize_result(result, command=command, args=args)))
    else:
        for diag in result.diagnostics:
            typer.echo(format_diagnostic(diag), err=True)
    raise typer.Exit(result.exit_code)


def _settings(
    config: Path | None,
    timeout: int | None,
    netsh_path: Path | None,
    terminate_on_timeout: bool | None,
    command: str,
    args: list[str],
    json_output: bool,
) -> Settings:
    loaded = load_settings(config)
    if loaded.value is None:
        _report(loaded, command, args, json_output)
    return merge_overrides(
        loaded.value,
        timeout_ms=timeout,
        netsh_path=netsh_path,
        terminate_on_timeout=terminate_on_timeout,
    )


def build_netsh(settings: Settings) -> NetSh:
    return NetSh(
        runner=SubprocessRunner(encoding=settings.output_encoding),
        locator=NetShLocator(override=settings.netsh_path),
        notifier=LoggingNotifier(),
        terminate_on_timeout=settings.terminate_on_timeout,
    )


@app.command("set-primary")
def set_primary(
    server: str = typer.Argument(...),
    interface: int = INTERFACE,
    family: AddressFamily = FAMILY,
    timeout: int | None = TIMEOUT,
    config: Path | None = CONFIG,
    netsh: Path | None = NETSH,
    terminate_on_timeout: bool | None = TERMINATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
):
    _configure_logging(verbose)
    args = [server, str(interface), family.value]
    settings = _settings(config, timeout, netsh, terminate_on_timeout, "set-primary", args, json_output)
    result = set_server(build_netsh(settings), family, interface, server, timeout=settings.timeout_ms)
    _report(result, "set-primary", args, json_output)


@app.command("set-secondary")
def set_secondary(
    server: str = typer.Argument(...),
    interface: int = INTERFACE,
    family: AddressFamily = FAMILY,
    timeout: int | None = TIMEOUT,
    config: Path | None = CONFIG,
    netsh: Path | None = NETSH,
    terminate_on_timeout: bool | None = TERMINATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
):
    _configure_logging(verbose)
    args = [server, str(interface), family.value]
    settings = _settings(config, timeout, netsh, terminate_on_timeout, "set-secondary", args, json_output)
    result = set_server(
        build_netsh(settings),
        family,
        interface,
        server,
        secondary=True,
        timeout=settings.timeout_ms,
    )
    _report(result, "set-secondary", args, json_output)


@app.command()
def dhcp(
    interface: int = INTERFACE,
    family: AddressFamily = FAMILY,
    timeout: int | None = TIMEOUT,
    config: Path | None = CONFIG,
    netsh: Path | None = NETSH,
    terminate_on_timeout: bool | None = TERMINATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
):
    _configure_logging(verbose)
    args = [str(interface), family.value]
    settings = _settings(config, timeout, netsh, terminate_on_timeout, "dhcp", args, json_output)
    result = set_dhcp(build_netsh(settings), family, interface, timeout=settings.timeout_ms)
    _report(result, "dhcp", args, json_output)


@app.command("set")
def set_servers(
    servers: list[str] = typer.Argument(..., help="DNS servers, both families mixed"),
    interface: int = INTERFACE,
    timeout: int | None = TIMEOUT,
    config: Path | None = CONFIG,
    netsh: Path | None = NETSH,
    terminate_on_timeout: bool | None = TERMINATE,
    strict: bool = typer.Option(False, "--strict"),
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
):
    _configure_logging(verbose)
    args = [*servers, str(interface)]
    settings = _settings(config, timeout, netsh, terminate_on_timeout, "set", args, json_output)
    result = set_dns_servers(
        build_netsh(settings),
        interface,
        servers,
        timeout=settings.timeout_ms,
        strict=strict,
    )
    _report(result, "set", args, json_output)


@app.command()
def reset(
    interface: int = INTERFACE,
    timeout: int | None = TIMEOUT,
    config: Path | None = CONFIG,
    netsh: Path | None = NETSH,
    terminate_on_timeout: bool | None = TERMINATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
):
    _configure_logging(verbose)
    args = [str(interface)]
    settings = _settings(config, timeout, netsh, terminate_on_timeout, "reset", args, json_output)
    result = reset_dns(build_netsh(settings), interface, timeout=settings.timeout_ms)
    _report(result, "reset", args, json_output)
