"""
Error types and fatal error reporting for the LAN discovery tool.

Startup failures (vendor database, interface enumeration, configuration) are
reported through ErrorHandler with troubleshooting suggestions and end the
process. Session errors (no addresses, IPv6 address, missing privileges)
are raised by the core components and turned into popups by the session
state machine; they never reach the handler.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .logger import Logger, get_logger


class ErrorType(Enum):
    """Startup step an error belongs to."""
    CONFIGURATION_ERROR = "configuration"
    VENDOR_DATABASE_ERROR = "vendor_database"
    INTERFACE_ERROR = "interface"


@dataclass
class ErrorContext:
    """
    Where a fatal error happened.

    Attributes:
        error_type: Startup step the error belongs to
        operation: Step that failed, e.g. "load_vendor_database"
        component: Part of the tool running the step
        additional_info: Extra key/value pairs for the report
    """
    error_type: ErrorType
    operation: str
    component: str
    additional_info: Dict[str, Any] = field(default_factory=dict)


class LanDiscoveryError(Exception):
    """Base exception class for the LAN discovery tool."""
    pass


class ConfigurationError(LanDiscoveryError):
    """The configuration directory or file cannot be used."""
    pass


class VendorDatabaseError(LanDiscoveryError):
    """The hardware vendor database could not be loaded."""
    pass


class InterfaceEnumerationError(LanDiscoveryError):
    """The operating system did not return its network interfaces."""
    pass


class UnsupportedAddressFamilyError(LanDiscoveryError):
    """ARP discovery was requested for a non-IPv4 address."""
    pass


class ChannelPermissionError(LanDiscoveryError):
    """The raw discovery socket could not be opened."""
    pass


class ErrorHandler:
    """
    Reports fatal errors with user-friendly troubleshooting suggestions.
    """

    SUGGESTIONS: Dict[ErrorType, List[str]] = {
        ErrorType.VENDOR_DATABASE_ERROR: [
            "Check that the vendor database file exists and is readable",
            "Point to another copy with --vendor-db PATH or vendor_db_path in scan_config.yml",
            "A Wireshark 'manuf' file can be used as the vendor database",
        ],
        ErrorType.INTERFACE_ERROR: [
            "Check that the operating system exposes its network interfaces",
            "Try running with elevated privileges (sudo)",
        ],
        ErrorType.CONFIGURATION_ERROR: [
            "Check YAML syntax and indentation",
            "Verify that --config-dir points to an existing directory",
        ],
    }

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)

    def report_fatal(self, error: Exception, context: ErrorContext) -> None:
        """
        Log a fatal error and the suggestions matching its type.

        Args:
            error: The exception that ended startup
            context: Where the error happened
        """
        self.logger.error(f"Error in {context.component}.{context.operation}: {error}",
                          exception=error, **context.additional_info)

        self.logger.info("Troubleshooting suggestions:")
        for suggestion in self.SUGGESTIONS[context.error_type]:
            self.logger.info(f"  • {suggestion}")
