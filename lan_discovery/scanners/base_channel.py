"""
Base discovery channel interface.

A discovery channel sends ARP requests and reads ARP packets on one network
interface. The session only relies on this contract, so tests and other
link-layer backends can stand in for the scapy implementation.
"""

import ipaddress
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..core.data_models import ArpPacket


class DiscoveryChannel(ABC):
    """
    Abstract base class for discovery channels.
    """

    @abstractmethod
    def send(self, target_ip: Union[str, ipaddress.IPv4Address]) -> None:
        """
        Send one ARP request for ``target_ip``.

        Raises:
            OSError: If the frame could not be sent
        """

    @abstractmethod
    def try_read(self, timeout: float) -> Optional[ArpPacket]:
        """
        Wait at most ``timeout`` seconds for one ARP packet.

        Returns:
            The packet, or None on timeout, read error or a non-ARP frame
        """

    @abstractmethod
    def close(self) -> None:
        """Release the channel. Calling it more than once is allowed."""

    def __enter__(self) -> "DiscoveryChannel":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
