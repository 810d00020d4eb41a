from __future__ import annotations

import logging

from windns.application.validation import Clock, monotonic_ms, validate_shell_out
from windns.domain.commands import (
    AddressFamily,
    add_secondary_dns_args,
    set_dhcp_dns_args,
    set_primary_dns_args,
)
from windns.ports.notifier import NotifierPort
from windns.ports.process_runner import ProcessRunnerPort
from windns.ports.tool_locator import ToolLocatorPort

logger = logging.getLogger(__name__)


class NetSh:
    """DNS server configuration through ``netsh``.

    Every operation makes a single attempt and raises ``LaunchError`` when
    netsh cannot be started or ``NetShError`` when it fails or times out.
    A ``timeout`` of 0 means the default of 3000 ms.
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        locator: ToolLocatorPort,
        notifier: NotifierPort,
        terminate_on_timeout: bool = False,
        clock: Clock = monotonic_ms,
    ) -> None:
        self.runner = runner
        self.locator = locator
        self.notifier = notifier
        self.terminate_on_timeout = terminate_on_timeout
        self.clock = clock

    def _shell_out(self, arguments: str, timeout: int) -> None:
        path = self.locator.resolve_path()
        logger.debug("netsh %s", arguments)
        with self.runner.start(path, arguments) as handle:
            validate_shell_out(
                handle,
                timeout,
                self.notifier,
                terminate_on_timeout=self.terminate_on_timeout,
                clock=self.clock,
            )

    def set_primary_dns(
        self, family: AddressFamily, interface_index: int, server: str, timeout: int = 0
    ) -> None:
        self._shell_out(set_primary_dns_args(family, interface_index, server), timeout)

    def set_secondary_dns(
        self, family: AddressFamily, interface_index: int, server: str, timeout: int = 0
    ) -> None:
        self._shell_out(add_secondary_dns_args(family, interface_index, server), timeout)

    def set_dhcp(self, family: AddressFamily, interface_index: int, timeout: int = 0) -> None:
        self._shell_out(set_dhcp_dns_args(family, interface_index), timeout)

    def set_ipv4_primary_dns(self, interface_index: int, server: str, timeout: int = 0) -> None:
        self.set_primary_dns(AddressFamily.IPV4, interface_index, server, timeout)

    def set_ipv4_secondary_dns(self, interface_index: int, server: str, timeout: int = 0) -> None:
        self.set_secondary_dns(AddressFamily.IPV4, interface_index, server, timeout)

    def set_ipv4_dhcp(self, interface_index: int, timeout: int = 0) -> None:
        self.set_dhcp(AddressFamily.IPV4, interface_index, timeout)

    def set_ipv6_primary_dns(self, interface_index: int, server: str, timeout: int = 0) -> None:
        self.set_primary_dns(AddressFamily.IPV6, interface_index, server, timeout)

    def set_ipv6_secondary_dns(self, interface_index: int, server: str, timeout: int = 0) -> None:
        self.set_secondary_dns(AddressFamily.IPV6, interface_index, server, timeout)

    def set_ipv6_dhcp(self, interface_index: int, timeout: int = 0) -> None:
        self.set_dhcp(AddressFamily.IPV6, interface_index, timeout)
