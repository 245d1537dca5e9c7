"""
Interactive session state machine.

The session walks the operator from interface selection to address
selection to a live scan. Recoverable problems (no address on the
interface, an IPv6 address, no raw socket access) raise a popup and keep
the current stage; the next confirm only dismisses the popup.
"""

from typing import Callable, List, Optional, Sequence

from .address_space import AddressSpaceEnumerator
from .data_models import (DiscoveredHost, InterfaceAddress, NetworkInterface,
                          ScanResultSet, SessionStage)
from ..scanners.base_channel import DiscoveryChannel
from ..scanners.probe_dispatcher import ProbeDispatcher
from ..scanners.reply_collector import DEFAULT_READ_TIMEOUT, ReplyCollector
from ..utils.error_handler import ChannelPermissionError, UnsupportedAddressFamilyError
from ..utils.logger import Logger, get_logger
from ..utils.vendor_db import VendorDatabase

POPUP_NO_ADDRESSES = "No available addresses for this interface!"
POPUP_IPV6_UNSUPPORTED = "ARP is not supported for IPv6!"
POPUP_NOT_ROOT = "Please run the program as root!"

ChannelOpener = Callable[[NetworkInterface, InterfaceAddress], DiscoveryChannel]


class ScanSession:
    """
    One running scan: the open channel, the probed addresses and the
    hosts that answered so far.
    """

    def __init__(self, interface: NetworkInterface, address: InterfaceAddress,
                 channel: DiscoveryChannel, targets: Sequence, vendors: VendorDatabase,
                 read_timeout: float = DEFAULT_READ_TIMEOUT, logger: Optional[Logger] = None):
        self.interface = interface
        self.address = address
        self.channel = channel
        self.targets = tuple(targets)
        self.results = ScanResultSet()
        self.collector = ReplyCollector(channel, vendors, self.results,
                                        read_timeout=read_timeout, logger=logger)

    def tick(self) -> Optional[DiscoveredHost]:
        return self.collector.poll()

    def close(self) -> None:
        self.channel.close()


class SessionStateMachine:
    """
    Three-stage selection flow with a popup overlay.

    Attributes:
        stage: Current SessionStage
        selection: Cursor position in the active list
        popup: Text of the active popup, None when no popup is shown
        quit_requested: Set once the operator asked to quit
        session: The running ScanSession once the SCANNING stage is reached
    """

    def __init__(self, interfaces: List[NetworkInterface], vendors: VendorDatabase,
                 open_channel: ChannelOpener,
                 enumerator: Optional[AddressSpaceEnumerator] = None,
                 dispatcher: Optional[ProbeDispatcher] = None,
                 read_timeout: float = DEFAULT_READ_TIMEOUT,
                 logger: Optional[Logger] = None):
        self.interfaces = list(interfaces)
        self.vendors = vendors
        self.open_channel = open_channel
        self.enumerator = enumerator or AddressSpaceEnumerator()
        self.logger = logger or get_logger(__name__)
        self.dispatcher = dispatcher or ProbeDispatcher(self.logger)
        self.read_timeout = read_timeout

        self.stage = SessionStage.SELECT_INTERFACE
        self.selection = 0
        self.popup: Optional[str] = None
        self.quit_requested = False

        self.interface: Optional[NetworkInterface] = None
        self.addresses: List[InterfaceAddress] = []
        self.address: Optional[InterfaceAddress] = None
        self.session: Optional[ScanSession] = None

    @property
    def selection_count(self) -> int:
        if self.stage is SessionStage.SELECT_INTERFACE:
            return len(self.interfaces)
        if self.stage is SessionStage.SELECT_ADDRESS:
            return len(self.addresses)
        return 0

    @property
    def results(self) -> Optional[ScanResultSet]:
        return self.session.results if self.session else None

    def move_up(self) -> None:
        if self.popup is None and self.selection > 0:
            self.selection -= 1

    def move_down(self) -> None:
        if self.popup is None and self.selection < self.selection_count - 1:
            self.selection += 1

    def quit(self) -> None:
        self.quit_requested = True

    def confirm(self) -> None:
        """Dismiss the popup, or confirm the highlighted entry of the stage."""
        if self.popup is not None:
            self.popup = None
            return

        if self.stage is SessionStage.SELECT_INTERFACE and self.interfaces:
            self._confirm_interface(self.interfaces[self.selection])
        elif self.stage is SessionStage.SELECT_ADDRESS and self.addresses:
            self._confirm_address(self.addresses[self.selection])

    def tick(self) -> Optional[DiscoveredHost]:
        """Run one poll of the scan; does nothing before SCANNING."""
        if self.stage is not SessionStage.SCANNING or self.session is None:
            return None
        return self.session.tick()

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def _show_popup(self, message: str) -> None:
        self.popup = message
        self.logger.debug(f"Popup: {message}", stage=self.stage.value)

    def _confirm_interface(self, interface: NetworkInterface) -> None:
        if not interface.addresses:
            self._show_popup(POPUP_NO_ADDRESSES)
            return

        self.interface = interface
        self.addresses = list(interface.addresses)
        self.selection = 0
        self.stage = SessionStage.SELECT_ADDRESS
        self.logger.debug(f"Selected interface {interface.name}", addresses=len(self.addresses))

    def _confirm_address(self, address: InterfaceAddress) -> None:
        try:
            targets = self.enumerator.enumerate(address)
        except UnsupportedAddressFamilyError:
            self._show_popup(POPUP_IPV6_UNSUPPORTED)
            return

        try:
            channel = self.open_channel(self.interface, address)
        except ChannelPermissionError as e:
            self.logger.debug(f"Discovery channel unavailable: {e}")
            self._show_popup(POPUP_NOT_ROOT)
            return

        # The session owns the channel from here on, so close() releases it
        # even if dispatch is interrupted.
        self.address = address
        self.session = ScanSession(self.interface, address, channel, targets, self.vendors,
                                   read_timeout=self.read_timeout, logger=self.logger)

        self.logger.info(f"Scanning {address.network} on {self.interface.name}",
                         addresses=len(targets))
        self.dispatcher.dispatch(channel, targets)
        self.selection = 0
        self.stage = SessionStage.SCANNING
