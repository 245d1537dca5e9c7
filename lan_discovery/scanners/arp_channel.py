"""
ARP discovery channel backed by a scapy layer-2 socket.

Opening the channel needs raw socket access (root or CAP_NET_RAW). Requests
are broadcast who-has frames. The socket is bound to the ARP ethertype and
every frame read back is decoded into an ArpPacket.
"""

import ipaddress
from typing import Optional, Union

from scapy.all import ARP, Ether, conf
from scapy.data import ETH_P_ARP

from .base_channel import DiscoveryChannel
from ..core.data_models import ArpOperation, ArpPacket, InterfaceAddress, NetworkInterface
from ..utils.error_handler import ChannelPermissionError
from ..utils.logger import get_logger
from ..utils.network_utils import normalize_mac

BROADCAST = "ff:ff:ff:ff:ff:ff"

logger = get_logger(__name__)


def decode_arp(frame) -> Optional[ArpPacket]:
    """
    Extract the ARP fields of a scapy frame.

    Args:
        frame: Packet read from the socket, may be None

    Returns:
        ArpPacket, or None for non-ARP frames and unknown operations
    """
    if frame is None or ARP not in frame:
        return None
    arp = frame[ARP]
    try:
        operation = ArpOperation(int(arp.op))
        return ArpPacket(
            operation=operation,
            sender_ip=str(arp.psrc),
            sender_hardware_address=normalize_mac(str(arp.hwsrc)),
        )
    except (TypeError, ValueError):
        return None


class ArpChannel(DiscoveryChannel):
    """
    ARP requests and replies on one interface.
    """

    def __init__(self, socket, interface: NetworkInterface, source: InterfaceAddress):
        self._socket = socket
        self.interface = interface
        self.source = source
        self._closed = False

    @classmethod
    def open(cls, interface: NetworkInterface, source: InterfaceAddress) -> "ArpChannel":
        """
        Open a layer-2 socket on ``interface``.

        Args:
            interface: Interface to bind to
            source: Address used as sender IP of the requests

        Raises:
            ChannelPermissionError: If the socket cannot be opened
        """
        try:
            # Receive ARP frames only
            socket = conf.L2socket(iface=interface.name, type=ETH_P_ARP)
        except OSError as e:
            raise ChannelPermissionError(
                f"Cannot open raw socket on {interface.name}: {e}"
            ) from e
        logger.debug(f"Opened ARP channel on {interface.name}", source=str(source.ip))
        return cls(socket, interface, source)

    def build_request(self, target_ip: Union[str, ipaddress.IPv4Address]):
        """Build the broadcast who-has frame for ``target_ip``."""
        hardware_address = self.interface.hardware_address or None
        ether = Ether(dst=BROADCAST, src=hardware_address) if hardware_address else Ether(dst=BROADCAST)
        arp = ARP(op=ArpOperation.REQUEST.value, psrc=str(self.source.ip), pdst=str(target_ip))
        if hardware_address:
            arp.hwsrc = hardware_address
        return ether / arp

    def send(self, target_ip: Union[str, ipaddress.IPv4Address]) -> None:
        self._socket.send(self.build_request(target_ip))

    def try_read(self, timeout: float) -> Optional[ArpPacket]:
        try:
            ready = self._socket.select([self._socket], timeout)
            if not ready:
                return None
            frame = self._socket.recv()
        except Exception as e:
            logger.debug(f"ARP read failed: {e}")
            return None
        return decode_arp(frame)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._socket.close()
        logger.debug(f"Closed ARP channel on {self.interface.name}")
