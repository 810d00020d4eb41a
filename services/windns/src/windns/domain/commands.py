"""Argument strings for the ``netsh interface ... dnsservers`` commands.

Interfaces are addressed by index rather than by name, so a renamed or
localized adapter name can never select the wrong interface.
"""

from __future__ import annotations

from enum import Enum


class AddressFamily(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


def set_primary_dns_args(family: AddressFamily, interface_index: int, server: str) -> str:
    # netsh interface ipv4 set dnsservers name="Ethernet 2" source=static address=8.8.8.8 validate=no
    return (
        f"interface {family.value} set dnsservers name={interface_index}"
        f" source=static address={server} validate=no"
    )


def add_secondary_dns_args(family: AddressFamily, interface_index: int, server: str) -> str:
    # netsh interface ipv4 add dnsservers name="Ethernet 2" address=8.8.4.4 index=2 validate=no
    return (
        f"interface {family.value} add dnsservers name={interface_index}"
        f" address={server} index=2 validate=no"
    )


def set_dhcp_dns_args(family: AddressFamily, interface_index: int) -> str:
    # netsh interface ipv4 set dnsservers name="Ethernet 2" source=dhcp
    return f"interface {family.value} set dnsservers name={interface_index} source=dhcp"
