"""Shared fixtures and fakes for the LAN discovery tests."""

import pytest

from lan_discovery.core.data_models import ArpOperation, ArpPacket, InterfaceAddress, NetworkInterface
from lan_discovery.scanners.base_channel import DiscoveryChannel
from lan_discovery.utils.error_handler import ChannelPermissionError
from lan_discovery.utils.vendor_db import VendorDatabase

MANUF_LINES = [
    "# Sample vendor database",
    "AA:BB:CC\tAcme\tAcme Networks Inc.",
    "00:1B:C5\tConverge\tConverging Systems Inc.",
    "00:1B:C5:00:00:00/36\tTinyCo\tTiny Company Ltd",
    "00:00:0C\tCisco                  # Cisco Systems, Inc",
    "B8:27:EB\tRaspberr",
]


class FakeChannel(DiscoveryChannel):
    """In-memory discovery channel fed with queued packets."""

    def __init__(self, packets=None, failing=()):
        self.packets = list(packets or [])
        self.failing = set(str(ip) for ip in failing)
        self.sent = []
        self.timeouts = []
        self.closed = 0

    def send(self, target_ip):
        if str(target_ip) in self.failing:
            raise OSError("No buffer space available")
        self.sent.append(str(target_ip))

    def try_read(self, timeout):
        self.timeouts.append(timeout)
        if not self.packets:
            return None
        packet = self.packets.pop(0)
        if isinstance(packet, BaseException):
            raise packet
        return packet

    def close(self):
        self.closed += 1


class FakeScreen:
    """Curses window stand-in with a fixed size and scripted key presses."""

    def __init__(self, keys=(), size=(24, 80)):
        self.keys = list(keys)
        self.size = size
        self.painted = []

    def getmaxyx(self):
        return self.size

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def addstr(self, y, x, text, attr=0):
        self.painted.append((y, x, text))

    def erase(self):
        self.painted = []

    def refresh(self):
        pass


def reply(ip, mac="aa:bb:cc:00:11:22"):
    return ArpPacket(ArpOperation.REPLY, ip, mac)


def request(ip, mac="aa:bb:cc:00:11:22"):
    return ArpPacket(ArpOperation.REQUEST, ip, mac)


def make_interface(name="eth0", addresses=("192.168.1.10/24",), mac="aa:bb:cc:dd:ee:ff", mtu=1500):
    return NetworkInterface(
        name=name,
        hardware_address=mac,
        mtu=mtu,
        addresses=[InterfaceAddress.parse(a) for a in addresses],
    )


def write_manuf(directory, lines=MANUF_LINES, name="manuf"):
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def vendors(tmp_path):
    return VendorDatabase.load(write_manuf(tmp_path))


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def opener(channel):
    """Channel opener that records calls and hands out the fake channel."""
    calls = []

    def _open(interface, address):
        calls.append((interface.name, str(address)))
        return channel

    _open.calls = calls
    return _open


@pytest.fixture
def denied_opener():
    def _open(interface, address):
        raise ChannelPermissionError("Operation not permitted")

    return _open
