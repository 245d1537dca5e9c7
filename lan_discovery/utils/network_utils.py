"""
Network utility functions for address and netmask conversions.
"""

import ipaddress
import re


def netmask_to_prefix(netmask: str) -> int:
    """
    Convert a dotted (IPv4) or colon (IPv6) netmask to a prefix length.

    Args:
        netmask: Netmask such as "255.255.255.0" or "ffff:ffff:ffff:ffff::"

    Returns:
        int: Prefix length

    Raises:
        ValueError: If netmask is invalid or not contiguous
    """
    try:
        mask = ipaddress.ip_address(netmask)
    except ValueError as e:
        raise ValueError(f"Invalid netmask: {netmask}") from e

    bits = int(mask)
    width = mask.max_prefixlen
    prefix = bin(bits).count("1")
    # Contiguous masks are all ones followed by all zeros
    if bits != ((1 << width) - 1) ^ ((1 << (width - prefix)) - 1):
        raise ValueError(f"Non-contiguous netmask: {netmask}")
    return prefix


def strip_zone(address: str) -> str:
    """Remove an IPv6 zone suffix such as ``%eth0``."""
    return address.split("%", 1)[0]


_MAC_SEPARATORS = re.compile(r"[:\-.]")


def normalize_mac(mac: str) -> str:
    """
    Normalize a hardware address to lowercase colon-separated form.

    Args:
        mac: Hardware address with ``:``, ``-`` or ``.`` separators

    Returns:
        str: Address such as "aa:bb:cc:00:11:22"

    Raises:
        ValueError: If the address does not contain an even number of hex digits
    """
    digits = _MAC_SEPARATORS.sub("", mac.strip()).lower()
    if not digits or len(digits) % 2 or not all(c in "0123456789abcdef" for c in digits):
        raise ValueError(f"Invalid hardware address: {mac}")
    return ":".join(digits[i:i + 2] for i in range(0, len(digits), 2))
