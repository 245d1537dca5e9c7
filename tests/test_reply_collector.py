"""Tests for ARP reply collection and deduplication."""

from conftest import FakeChannel, reply, request

from lan_discovery.core.data_models import DiscoveredHost, ScanResultSet
from lan_discovery.scanners.reply_collector import DEFAULT_READ_TIMEOUT, ReplyCollector


def make_collector(vendors, packets, read_timeout=DEFAULT_READ_TIMEOUT):
    channel = FakeChannel(packets)
    results = ScanResultSet()
    return ReplyCollector(channel, vendors, results, read_timeout=read_timeout), channel, results


def drain(collector, ticks):
    return [collector.poll() for _ in range(ticks)]


class TestPolling:

    def test_no_packet_is_not_an_error(self, vendors):
        """A read timeout yields no host and leaves the results empty."""
        collector, channel, results = make_collector(vendors, [])
        assert collector.poll() is None
        assert len(results) == 0

    def test_read_uses_configured_deadline(self, vendors):
        collector, channel, _ = make_collector(vendors, [], read_timeout=0.1)
        collector.poll()
        collector.poll()
        assert channel.timeouts == [0.1, 0.1]

    def test_default_deadline_is_short(self, vendors):
        collector, channel, _ = make_collector(vendors, [])
        collector.poll()
        assert channel.timeouts == [0.25]

    def test_new_reply_is_recorded_with_vendor(self, vendors):
        collector, _, results = make_collector(vendors, [reply("192.168.1.42", "aa:bb:cc:00:11:22")])
        host = collector.poll()
        assert host == DiscoveredHost("192.168.1.42", "aa:bb:cc:00:11:22", "Acme Networks Inc.")
        assert results.hosts == [host]

    def test_unknown_vendor_is_empty_string(self, vendors):
        collector, _, results = make_collector(vendors, [reply("192.168.1.7", "02:00:00:00:00:01")])
        host = collector.poll()
        assert host.vendor == ""
        assert len(results) == 1


class TestDeduplication:

    def test_duplicate_replies_give_one_host(self, vendors):
        """Two replies from 192.168.1.42 leave exactly one entry."""
        packets = [reply("192.168.1.42"), reply("192.168.1.42")]
        collector, _, results = make_collector(vendors, packets)
        first, second = drain(collector, 2)
        assert first is not None
        assert second is None
        assert [h.ip_address for h in results] == ["192.168.1.42"]

    def test_requests_are_ignored(self, vendors):
        """Reflected requests never create hosts."""
        packets = [request("192.168.1.10"), request("192.168.1.1")]
        collector, _, results = make_collector(vendors, packets)
        assert drain(collector, 2) == [None, None]
        assert len(results) == 0

    def test_request_does_not_mark_sender_seen(self, vendors):
        packets = [request("192.168.1.1"), reply("192.168.1.1")]
        collector, _, results = make_collector(vendors, packets)
        drain(collector, 2)
        assert [h.ip_address for h in results] == ["192.168.1.1"]

    def test_first_reply_wins(self, vendors):
        """A later reply with another hardware address does not change the entry."""
        packets = [reply("192.168.1.5", "aa:bb:cc:00:00:01"), reply("192.168.1.5", "00:00:0c:00:00:01")]
        collector, _, results = make_collector(vendors, packets)
        drain(collector, 2)
        assert results.hosts == [DiscoveredHost("192.168.1.5", "aa:bb:cc:00:00:01", "Acme Networks Inc.")]

    def test_mixed_sequence_keeps_arrival_order(self, vendors):
        packets = [
            reply("192.168.1.3"),
            request("192.168.1.9"),
            reply("192.168.1.1"),
            reply("192.168.1.3"),
            reply("192.168.1.2"),
            reply("192.168.1.1"),
        ]
        collector, _, results = make_collector(vendors, packets)
        drain(collector, len(packets) + 2)
        assert [h.ip_address for h in results] == ["192.168.1.3", "192.168.1.1", "192.168.1.2"]

    def test_handle_is_idempotent(self, vendors):
        collector, _, results = make_collector(vendors, [])
        packet = reply("10.0.0.8")
        collector.handle(packet)
        snapshot = results.hosts
        assert collector.handle(packet) is None
        assert results.hosts == snapshot
