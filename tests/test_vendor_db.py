"""Tests for the hardware vendor database."""

import pytest

from conftest import MANUF_LINES, write_manuf

from lan_discovery.utils import vendor_db
from lan_discovery.utils.error_handler import VendorDatabaseError
from lan_discovery.utils.vendor_db import VendorDatabase


class TestParsing:

    def test_counts_entries(self, vendors):
        assert len(vendors) == len([line for line in MANUF_LINES if not line.startswith("#")])

    def test_long_name_preferred(self, vendors):
        assert vendors.lookup("aa:bb:cc:00:11:22") == "Acme Networks Inc."

    def test_comment_long_name(self, vendors):
        assert vendors.lookup("00:00:0c:12:34:56") == "Cisco Systems, Inc"

    def test_short_name_when_no_long_name(self, vendors):
        assert vendors.lookup("b8:27:eb:01:02:03") == "Raspberr"

    def test_lines_without_name_are_skipped(self, tmp_path):
        db = VendorDatabase.load(write_manuf(tmp_path, ["00:11", "", "00:11:22\tGood\tGood Corp"]))
        assert len(db) == 1
        assert db.lookup("00:11:22:33:44:55") == "Good Corp"

    def test_invalid_block_prefix_is_ignored(self, tmp_path):
        db = VendorDatabase.load(write_manuf(tmp_path, [
            "00:11:22\tGood\tGood Corp",
            "00:11:22:30:00:00/99\tBroken\tBroken Block",
        ]))
        assert db.lookup("00:11:22:30:00:01") == "Good Corp"


class TestLookup:

    def test_longest_prefix_wins(self, vendors):
        """An MA-S block overrides the OUI that contains it."""
        assert vendors.lookup("00:1b:c5:00:00:07") == "Tiny Company Ltd"
        assert vendors.lookup("00:1b:c5:00:10:07") == "Converging Systems Inc."

    def test_nested_blocks(self, tmp_path):
        db = VendorDatabase.load(write_manuf(tmp_path, [
            "70:B3:D5\tIEEERegi\tIEEE Registration Authority",
            "70:B3:D5:00:00:00/28\tMedium\tMedium Block Inc.",
            "70:B3:D5:00:00:00/36\tSmall\tSmall Block Ltd",
        ]))
        assert db.lookup("70:b3:d5:00:00:01") == "Small Block Ltd"
        assert db.lookup("70:b3:d5:00:80:01") == "Medium Block Inc."
        assert db.lookup("70:b3:d5:f0:00:01") == "IEEE Registration Authority"

    def test_separators_and_case_ignored(self, vendors):
        assert vendors.lookup("AA-BB-CC-00-11-22") == "Acme Networks Inc."
        assert vendors.lookup("aabb.cc00.1122") == "Acme Networks Inc."

    def test_no_match(self, vendors):
        assert vendors.lookup("02:00:00:00:00:01") is None

    @pytest.mark.parametrize("value", ["", "zz:zz", "aa:bb:cc"])
    def test_invalid_address(self, vendors, value):
        assert vendors.lookup(value) is None


class TestLoad:

    def test_loaded_with_scapy(self, tmp_path, monkeypatch):
        seen = []
        real_load = vendor_db.load_manuf

        def recording_load(filename):
            seen.append(filename)
            return real_load(filename)

        monkeypatch.setattr(vendor_db, "load_manuf", recording_load)
        path = write_manuf(tmp_path)
        db = VendorDatabase.load(path)
        assert seen == [str(path)]
        assert db.source == str(path)
        assert db.lookup("aa:bb:cc:00:00:00") == "Acme Networks Inc."

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(VendorDatabaseError) as exc_info:
            VendorDatabase.load(tmp_path / "missing.txt")
        assert "missing.txt" in str(exc_info.value)

    def test_empty_file_is_fatal(self, tmp_path):
        with pytest.raises(VendorDatabaseError):
            VendorDatabase.load(write_manuf(tmp_path, ["# nothing here"]))
