"""
Address space enumeration for ARP scans.

The enumerator keeps the first two octets of the interface address fixed and
walks the last two, keeping each candidate that the interface network
contains. Networks of /16 or narrower are covered exactly. For wider
networks only the /16 block holding the interface address is produced;
scanning more than 65536 hosts with one request each is outside what the
tool is meant for.
"""

import ipaddress
from typing import List

from .data_models import InterfaceAddress
from ..utils.error_handler import UnsupportedAddressFamilyError


class AddressSpaceEnumerator:
    """Produces every IPv4 address of an interface address's subnet."""

    def enumerate(self, address: InterfaceAddress) -> List[ipaddress.IPv4Address]:
        """
        Enumerate the addresses contained by the network of ``address``.

        Args:
            address: Interface address with its netmask

        Returns:
            Addresses in ascending order, network and broadcast included

        Raises:
            UnsupportedAddressFamilyError: If the address is not IPv4
        """
        if address.version != 4:
            raise UnsupportedAddressFamilyError("ARP is not supported for IPv6")

        network_address = int(address.network.network_address)
        netmask = int(address.network.netmask)
        first, second = address.ip.packed[:2]
        base = (first << 24) | (second << 16)

        return [ipaddress.IPv4Address(candidate)
                for candidate in range(base, base + 0x10000)
                if candidate & netmask == network_address]
