"""
Hardware vendor database.

Maps hardware-address prefixes to organization names. The database is read
once at startup with scapy's ``load_manuf`` from a Wireshark ``manuf``-style
text file:

    00:00:0C        Cisco           Cisco Systems, Inc
    00:1B:C5:00:00:00/36    Converge        Converging Systems Inc.
    00:00:0E        Fujitsu         # Fujitsu Limited

scapy resolves plain OUIs. Entries with a prefix longer than an OUI (MA-M
and MA-S blocks) are matched here first, longest prefix wins.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from scapy.data import ManufDA, load_manuf

from .error_handler import VendorDatabaseError
from .logger import get_logger
from .network_utils import normalize_mac

_MAC_BITS = 48
_OUI_BITS = 24

logger = get_logger(__name__)


def _parse_block(prefix: str) -> Tuple[int, int]:
    """
    Parse a block prefix such as ``00:1B:C5:00:00:00/36``.

    Returns:
        Tuple of (prefix length in bits, prefix value)
    """
    address, _, bits_text = prefix.partition("/")
    digits = normalize_mac(address).replace(":", "")
    bits = int(bits_text)
    if not 0 < bits <= _MAC_BITS or len(digits) * 4 > _MAC_BITS:
        raise ValueError(f"Invalid prefix length in {prefix}")
    return bits, int(digits.ljust(_MAC_BITS // 4, "0"), 16) >> (_MAC_BITS - bits)


class VendorDatabase:
    """
    Read-only mapping from hardware-address prefixes to organization names.
    """

    def __init__(self, manuf: ManufDA, source: str = ""):
        self._manuf = manuf
        self.source = source
        self._blocks: Dict[int, Dict[int, str]] = {}

        for prefix in manuf.keys():
            if "/" not in prefix:
                continue
            try:
                bits, value = _parse_block(prefix)
            except ValueError:
                logger.debug(f"Ignoring vendor prefix {prefix!r}", source=source)
                continue
            if bits > _OUI_BITS:
                self._blocks.setdefault(bits, {})[value] = manuf[prefix][1]

        # Longest prefixes first
        self._lengths = sorted(self._blocks, reverse=True)

    def __len__(self) -> int:
        return len(self._manuf)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "VendorDatabase":
        """
        Load the vendor database from a file.

        Args:
            path: Path of the manuf-style database

        Returns:
            VendorDatabase with every parsed entry

        Raises:
            VendorDatabaseError: If the file is missing, unreadable or empty
        """
        db_path = Path(path)
        try:
            database = cls(load_manuf(str(db_path)), source=str(db_path))
        except OSError as e:
            raise VendorDatabaseError(
                f"Vendor database failed to initialise, please check whether {db_path} exists"
            ) from e

        if not len(database):
            raise VendorDatabaseError(f"Vendor database {db_path} contains no entries")

        logger.debug(f"Loaded {len(database)} vendor prefixes", source=str(db_path),
                     blocks=sum(len(block) for block in database._blocks.values()))
        return database

    def lookup(self, hardware_address: str) -> Optional[str]:
        """
        Resolve the organization owning a hardware address.

        Args:
            hardware_address: Address such as "aa:bb:cc:00:11:22"

        Returns:
            Organization name, or None when no prefix matches
        """
        try:
            mac = normalize_mac(hardware_address)
        except ValueError:
            return None
        digits = mac.replace(":", "")
        if len(digits) != _MAC_BITS // 4:
            return None

        address = int(digits, 16)
        for bits in self._lengths:
            organization = self._blocks[bits].get(address >> (_MAC_BITS - bits))
            if organization is not None:
                return organization

        try:
            return self._manuf.lookup(mac)[1]
        except KeyError:
            return None
