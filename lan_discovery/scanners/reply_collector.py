"""
Reply collection for a running ARP scan.

The collector is driven by the session tick: each call performs a single
bounded read and records at most one new host.
"""

from typing import Optional

from .base_channel import DiscoveryChannel
from ..core.data_models import ArpOperation, ArpPacket, DiscoveredHost, ScanResultSet
from ..utils.logger import Logger, get_logger
from ..utils.vendor_db import VendorDatabase

DEFAULT_READ_TIMEOUT = 0.25


class ReplyCollector:
    """
    Reads ARP replies and records each responding IP once.

    Attributes:
        channel: Open discovery channel
        vendors: Vendor database used to name each new responder
        results: Result set shared with the session
        read_timeout: Deadline in seconds for each read attempt
    """

    def __init__(self, channel: DiscoveryChannel, vendors: VendorDatabase,
                 results: ScanResultSet, read_timeout: float = DEFAULT_READ_TIMEOUT,
                 logger: Optional[Logger] = None):
        self.channel = channel
        self.vendors = vendors
        self.results = results
        self.read_timeout = read_timeout
        self.logger = logger or get_logger(__name__)

    def poll(self) -> Optional[DiscoveredHost]:
        """
        Attempt one read and record the sender if it is new.

        Returns:
            The newly discovered host, or None when nothing new arrived
        """
        packet = self.channel.try_read(self.read_timeout)
        if packet is None:
            return None
        return self.handle(packet)

    def handle(self, packet: ArpPacket) -> Optional[DiscoveredHost]:
        """
        Record a packet read from the channel.

        Requests (including our own reflected broadcasts) and replies from
        senders already in the result set are ignored.
        """
        if packet.operation is not ArpOperation.REPLY:
            return None
        if packet.sender_ip in self.results:
            return None

        host = DiscoveredHost(
            ip_address=packet.sender_ip,
            hardware_address=packet.sender_hardware_address,
            vendor=self.vendors.lookup(packet.sender_hardware_address) or "",
        )
        self.results.add(host)
        self.logger.debug(f"Discovered {host.ip_address}", mac=host.hardware_address,
                          vendor=host.vendor or "unknown")
        return host
