"""
Network interface enumeration.

Reads the interfaces of the host through psutil and converts them into
NetworkInterface values offered in the first selection stage.
"""

import ipaddress
import socket
from typing import List

import psutil

from .data_models import InterfaceAddress, NetworkInterface
from ..utils.error_handler import InterfaceEnumerationError
from ..utils.logger import get_logger
from ..utils.network_utils import netmask_to_prefix, normalize_mac, strip_zone

logger = get_logger(__name__)

# psutil reports link-layer addresses under AF_LINK (psutil.AF_LINK maps to
# AF_PACKET on Linux)
_LINK_FAMILIES = {psutil.AF_LINK}
_IP_FAMILIES = {socket.AF_INET, socket.AF_INET6}


def _to_interface_address(address: str, netmask: str):
    ip = strip_zone(address)
    if netmask:
        prefix = netmask_to_prefix(strip_zone(netmask))
    else:
        prefix = ipaddress.ip_address(ip).max_prefixlen
    return InterfaceAddress(ipaddress.ip_interface(f"{ip}/{prefix}"))


def list_interfaces(include_down: bool = True) -> List[NetworkInterface]:
    """
    List the network interfaces of this host.

    Args:
        include_down: Also list interfaces that are not up

    Returns:
        Interfaces in the order psutil reports them, each with its IPv4 and
        IPv6 addresses

    Raises:
        InterfaceEnumerationError: If the interfaces cannot be read
    """
    try:
        all_addresses = psutil.net_if_addrs()
        all_stats = psutil.net_if_stats()
    except (OSError, RuntimeError) as e:
        raise InterfaceEnumerationError(f"Failed to get interfaces: {e}") from e

    interfaces = []
    for name, entries in all_addresses.items():
        stats = all_stats.get(name)
        is_up = bool(stats.isup) if stats else False
        if not is_up and not include_down:
            continue

        hardware_address = ""
        addresses = []
        for entry in entries:
            if entry.family in _LINK_FAMILIES:
                try:
                    hardware_address = normalize_mac(entry.address)
                except ValueError:
                    logger.debug(f"Ignoring hardware address {entry.address!r} of {name}")
            elif entry.family in _IP_FAMILIES:
                try:
                    addresses.append(_to_interface_address(entry.address, entry.netmask))
                except ValueError as e:
                    logger.debug(f"Ignoring address {entry.address} of {name}: {e}")

        interfaces.append(NetworkInterface(
            name=name,
            hardware_address=hardware_address,
            mtu=stats.mtu if stats else 0,
            is_up=is_up,
            addresses=addresses,
        ))

    logger.debug(f"Found {len(interfaces)} network interfaces")
    return interfaces
