"""
Discovery channel and scan components.

The scapy-backed ArpChannel lives in ``arp_channel`` and is imported from
there directly, so the rest of the package loads without raw socket support.
"""

from .base_channel import DiscoveryChannel
from .probe_dispatcher import ProbeDispatcher
from .reply_collector import ReplyCollector

__all__ = [
    'DiscoveryChannel',
    'ProbeDispatcher',
    'ReplyCollector'
]
