"""
LAN Discovery

Interactive ARP host discovery: pick an interface and one of its addresses,
every host of the subnet is probed and the ones that answer are listed
live with their hardware address and vendor.
"""

__version__ = "1.0.0"
__author__ = "LAN Discovery Team"
