"""Tests for OS interface enumeration."""

import socket
from types import SimpleNamespace

import psutil
import pytest

from lan_discovery.core import interfaces as interfaces_module
from lan_discovery.core.interfaces import list_interfaces
from lan_discovery.utils.error_handler import InterfaceEnumerationError


def addr(family, address, netmask=None):
    return SimpleNamespace(family=family, address=address, netmask=netmask, broadcast=None, ptp=None)


def stats(isup=True, mtu=1500):
    return SimpleNamespace(isup=isup, duplex=0, speed=0, mtu=mtu, flags="")


@pytest.fixture
def fake_psutil(monkeypatch):
    def install(addrs, all_stats):
        monkeypatch.setattr(interfaces_module.psutil, "net_if_addrs", lambda: addrs)
        monkeypatch.setattr(interfaces_module.psutil, "net_if_stats", lambda: all_stats)

    return install


class TestListInterfaces:

    def test_maps_psutil_entries(self, fake_psutil):
        fake_psutil(
            {
                "eth0": [
                    addr(psutil.AF_LINK, "AA-BB-CC-DD-EE-FF"),
                    addr(socket.AF_INET, "192.168.1.10", "255.255.255.0"),
                    addr(socket.AF_INET6, "fe80::1%eth0", "ffff:ffff:ffff:ffff::"),
                ],
            },
            {"eth0": stats(mtu=9000)},
        )
        [eth0] = list_interfaces()
        assert eth0.name == "eth0"
        assert eth0.hardware_address == "aa:bb:cc:dd:ee:ff"
        assert eth0.mtu == 9000
        assert eth0.is_up
        assert [str(a) for a in eth0.addresses] == ["192.168.1.10/24", "fe80::1/64"]

    def test_keeps_os_order(self, fake_psutil):
        fake_psutil(
            {"lo": [addr(socket.AF_INET, "127.0.0.1", "255.0.0.0")], "eth0": [], "wlan0": []},
            {"lo": stats(mtu=65536), "eth0": stats(), "wlan0": stats()},
        )
        assert [i.name for i in list_interfaces()] == ["lo", "eth0", "wlan0"]

    def test_interface_without_addresses(self, fake_psutil):
        fake_psutil({"tun0": []}, {"tun0": stats()})
        [tun0] = list_interfaces()
        assert tun0.addresses == []
        assert tun0.hardware_address == ""

    def test_missing_stats(self, fake_psutil):
        fake_psutil({"eth1": [addr(socket.AF_INET, "10.0.0.2", "255.255.255.252")]}, {})
        [eth1] = list_interfaces()
        assert eth1.mtu == 0
        assert not eth1.is_up
        assert str(eth1.addresses[0]) == "10.0.0.2/30"

    def test_down_interfaces_can_be_hidden(self, fake_psutil):
        fake_psutil({"eth0": [], "eth1": []}, {"eth0": stats(), "eth1": stats(isup=False)})
        assert [i.name for i in list_interfaces(include_down=True)] == ["eth0", "eth1"]
        assert [i.name for i in list_interfaces(include_down=False)] == ["eth0"]

    def test_address_without_netmask_is_host_route(self, fake_psutil):
        fake_psutil({"ppp0": [addr(socket.AF_INET, "10.64.0.1", None)]}, {"ppp0": stats()})
        assert str(list_interfaces()[0].addresses[0]) == "10.64.0.1/32"

    def test_invalid_netmask_is_skipped(self, fake_psutil):
        fake_psutil({"eth0": [addr(socket.AF_INET, "10.0.0.2", "255.0.255.0")]}, {"eth0": stats()})
        assert list_interfaces()[0].addresses == []

    def test_enumeration_failure_is_reported(self, monkeypatch):
        def broken():
            raise OSError("netlink unavailable")

        monkeypatch.setattr(interfaces_module.psutil, "net_if_addrs", broken)
        with pytest.raises(InterfaceEnumerationError):
            list_interfaces()
