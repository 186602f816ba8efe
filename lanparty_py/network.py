"""
Network information for ``lan-party-tools network``.

Lists the local interfaces worth sharing with other players (loopback and
link-local-only interfaces are hidden) and looks up the public IP addresses.
"""

import ipaddress
import logging
import socket
from dataclasses import dataclass, field
from typing import List, Optional, Union

import httpx
import psutil

from lanparty_py.exceptions import NetworkError

logger = logging.getLogger("lanparty.network")

PUBLIC_IPV4_URL = "https://api.ipify.org/"
PUBLIC_IPV6_URL = "https://api6.ipify.org/"
REQUEST_TIMEOUT = 10.0

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class InterfaceAddress:
    address: IPAddress
    netmask: Optional[str] = None

    def __str__(self) -> str:
        if self.netmask is None:
            return f"{self.address}/__"
        return f"{self.address}/{prefix_length(self.netmask)}"


@dataclass
class Interface:
    name: str
    addresses: List[InterfaceAddress] = field(default_factory=list)


def prefix_length(netmask: str) -> int:
    """Count the leading one bits of an IPv4 or IPv6 netmask."""
    if "/" in netmask:
        # Some platforms report IPv6 masks as "ffff:ffff::/64".
        return int(netmask.split("/", 1)[1])
    count = 0
    for octet in ipaddress.ip_address(netmask).packed:
        bit = 0b1000_0000
        while bit and octet & bit:
            count += 1
            bit >>= 1
        if bit:
            break
    return count


def should_display_address(address: IPAddress) -> bool:
    """Loopback and link-local addresses are of no use to other players."""
    return not (address.is_loopback or address.is_link_local)


def _parse_address(raw: str) -> Optional[IPAddress]:
    try:
        return ipaddress.ip_address(raw.split("%", 1)[0])
    except ValueError:
        logger.debug(f"Ignoring unparsable address {raw!r}")
        return None


def list_interfaces() -> List[Interface]:
    """
    Return the interfaces with at least one displayable IP address.

    All IP addresses of a kept interface are returned, including its
    loopback or link-local ones.
    """
    try:
        raw_interfaces = psutil.net_if_addrs()
    except OSError as e:
        raise NetworkError(f"Could not get networks: {e}") from e

    interfaces: List[Interface] = []
    for name, snics in raw_interfaces.items():
        addresses: List[InterfaceAddress] = []
        for snic in snics:
            if snic.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            address = _parse_address(snic.address)
            if address is None:
                continue
            addresses.append(InterfaceAddress(address, snic.netmask))

        if any(should_display_address(a.address) for a in addresses):
            interfaces.append(Interface(name=name, addresses=addresses))
        else:
            logger.debug(f"Hiding interface {name}")
    return interfaces


def fetch_public_ip(url: str, timeout: float = REQUEST_TIMEOUT) -> str:
    """Ask an ipify endpoint for the public address of this machine."""
    logger.debug(f"Requesting public IP from {url}")
    try:
        response = httpx.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise NetworkError(f"Public IP request to {url} failed: {e}") from e
    return response.text.strip()


def public_addresses() -> List[str]:
    """
    Return the public addresses as ``addr/prefix`` strings.

    IPv4 is required; IPv6 is skipped with a warning when unavailable and
    omitted when the endpoint answers with the IPv4 address.
    """
    ipv4 = fetch_public_ip(PUBLIC_IPV4_URL)
    addresses = [f"{ipv4}/32"]

    try:
        ipv6 = fetch_public_ip(PUBLIC_IPV6_URL)
    except NetworkError as e:
        logger.warning(f"No public IPv6 address: {e}")
        return addresses

    if ipv6 != ipv4:
        addresses.append(f"{ipv6}/128")
    return addresses
