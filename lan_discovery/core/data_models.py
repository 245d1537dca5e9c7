"""
Core data models and enums for the LAN discovery tool.

This module defines the interfaces and addresses offered for selection, the
ARP packets read from the discovery channel, and the hosts collected while
a scan session runs.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Set, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


class SessionStage(Enum):
    """The three stages of an interactive session."""
    SELECT_INTERFACE = "select_interface"
    SELECT_ADDRESS = "select_address"
    SCANNING = "scanning"


class ArpOperation(Enum):
    """ARP operation codes."""
    REQUEST = 1
    REPLY = 2


@dataclass(frozen=True)
class InterfaceAddress:
    """
    An address bound to a network interface.

    Attributes:
        interface: Address together with its network (e.g. 192.168.1.10/24)
    """
    interface: IPInterface

    @classmethod
    def parse(cls, text: str) -> "InterfaceAddress":
        return cls(ipaddress.ip_interface(text))

    @property
    def ip(self) -> IPAddress:
        return self.interface.ip

    @property
    def network(self):
        return self.interface.network

    @property
    def version(self) -> int:
        return self.interface.version

    @property
    def netmask(self) -> str:
        return str(self.interface.netmask)

    def __str__(self) -> str:
        return self.interface.with_prefixlen


@dataclass(frozen=True)
class NetworkInterface:
    """
    A network interface reported by the operating system.

    Attributes:
        name: Interface name (e.g. eth0)
        hardware_address: Link-layer address, empty when the interface has none
        mtu: Maximum transmission unit, 0 when unknown
        is_up: Whether the interface is administratively up
        addresses: Addresses bound to the interface, in OS order
    """
    name: str
    hardware_address: str = ""
    mtu: int = 0
    is_up: bool = True
    addresses: List[InterfaceAddress] = field(default_factory=list)


@dataclass(frozen=True)
class ArpPacket:
    """The fields of an ARP packet the session cares about."""
    operation: ArpOperation
    sender_ip: str
    sender_hardware_address: str


@dataclass(frozen=True)
class DiscoveredHost:
    """
    A host that answered an ARP request.

    Attributes:
        ip_address: Sender IP address of the reply
        hardware_address: Sender hardware address of the reply
        vendor: Organization owning the hardware address prefix, "" if unknown
    """
    ip_address: str
    hardware_address: str
    vendor: str = ""


class ScanResultSet:
    """
    Hosts discovered during one scan session, in arrival order.

    Append-only: each sender IP is recorded once, later replies from the
    same sender are ignored.
    """

    def __init__(self):
        self._hosts: List[DiscoveredHost] = []
        self._seen: Set[str] = set()

    def __len__(self) -> int:
        return len(self._hosts)

    def __iter__(self) -> Iterator[DiscoveredHost]:
        return iter(self._hosts)

    def __contains__(self, ip_address: str) -> bool:
        return ip_address in self._seen

    def add(self, host: DiscoveredHost) -> bool:
        """
        Record a host unless its IP address was already seen.

        Returns:
            True if the host was appended, False for a duplicate
        """
        if host.ip_address in self._seen:
            return False
        self._seen.add(host.ip_address)
        self._hosts.append(host)
        return True

    @property
    def hosts(self) -> List[DiscoveredHost]:
        return list(self._hosts)

    def most_recent_first(self, limit: Optional[int] = None) -> List[DiscoveredHost]:
        hosts = self._hosts[::-1]
        return hosts if limit is None else hosts[:max(limit, 0)]
