"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger, hold_output, release_output
from .error_handler import (
    ErrorHandler, ErrorContext, ErrorType,
    LanDiscoveryError, ConfigurationError, VendorDatabaseError, InterfaceEnumerationError,
    UnsupportedAddressFamilyError, ChannelPermissionError
)
from .vendor_db import VendorDatabase
from . import network_utils

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'hold_output',
    'release_output',
    'ErrorHandler',
    'ErrorContext',
    'ErrorType',
    'LanDiscoveryError',
    'ConfigurationError',
    'VendorDatabaseError',
    'InterfaceEnumerationError',
    'UnsupportedAddressFamilyError',
    'ChannelPermissionError',
    'VendorDatabase',
    'network_utils'
]
