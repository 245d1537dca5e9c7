"""
Core components for LAN discovery functionality.
"""

from .data_models import (
    SessionStage,
    ArpOperation,
    InterfaceAddress,
    NetworkInterface,
    ArpPacket,
    DiscoveredHost,
    ScanResultSet
)
from .address_space import AddressSpaceEnumerator

__all__ = [
    'SessionStage',
    'ArpOperation',
    'InterfaceAddress',
    'NetworkInterface',
    'ArpPacket',
    'DiscoveredHost',
    'ScanResultSet',
    'AddressSpaceEnumerator'
]
