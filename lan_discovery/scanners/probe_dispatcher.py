"""
Probe dispatch: one ARP request per enumerated address.
"""

import ipaddress
from typing import Iterable, Optional, Union

from .base_channel import DiscoveryChannel
from ..utils.logger import Logger, get_logger


class ProbeDispatcher:
    """
    Fires one request per address, in order, without waiting for replies.

    Send failures are ignored: an address that could not be probed simply
    never answers, the same as a host that is not there.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)

    def dispatch(self, channel: DiscoveryChannel,
                 addresses: Iterable[Union[str, ipaddress.IPv4Address]]) -> int:
        """
        Send one request for each address.

        Args:
            channel: Open discovery channel
            addresses: Target addresses in send order

        Returns:
            Number of requests handed to the channel without error
        """
        sent = 0
        failed = 0
        for address in addresses:
            try:
                channel.send(address)
                sent += 1
            except Exception:
                failed += 1

        if failed:
            self.logger.debug(f"{failed} ARP requests could not be sent")
        self.logger.debug(f"Dispatched {sent} ARP requests")
        return sent
