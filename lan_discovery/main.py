"""
Main entry point for the LAN discovery tool.

This module provides the command-line interface: argument parsing, the
startup checks that must pass before the interactive screen opens, and
shutdown handling.
"""

import argparse
import curses
import signal
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.config_loader import ConfigLoader, ScanConfig
from .core.data_models import NetworkInterface
from .core.interfaces import list_interfaces
from .core.session import SessionStateMachine
from .scanners.arp_channel import ArpChannel
from .ui.terminal import TerminalUI
from .utils.error_handler import (ConfigurationError, ErrorContext, ErrorHandler, ErrorType,
                                  InterfaceEnumerationError, LanDiscoveryError,
                                  VendorDatabaseError)
from .utils.logger import LogLevel, get_logger, hold_output, release_output, set_log_level
from .utils.vendor_db import VendorDatabase

SUMMARY_HEADERS = ["IP Address", "MAC Address", "Vendor"]
SUMMARY_WIDTHS = [15, 17, 40]


class LanDiscoveryApp:
    """
    Main application class for the LAN discovery tool.

    Handles startup, the interactive session lifecycle and shutdown.
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.machine: Optional[SessionStateMachine] = None

        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum: int, frame) -> None:
        """Ask the running session to quit, or exit if none is running."""
        if self.machine is not None:
            self.machine.quit()
        else:
            sys.exit(0)

    def _resolve_config_dir(self, config_dir: Optional[str]) -> Optional[str]:
        """
        Validate the configuration directory given on the command line.

        Raises:
            ConfigurationError: If the path is missing or not a directory
        """
        if not config_dir:
            return None
        config_path = Path(config_dir)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration directory does not exist: {config_dir}")
        if not config_path.is_dir():
            raise ConfigurationError(f"Configuration path is not a directory: {config_dir}")
        return str(config_path.resolve())

    def _load_config(self, args: argparse.Namespace) -> ScanConfig:
        config_dir = self._resolve_config_dir(args.config_dir)
        self.logger.debug(f"Loading configuration from {config_dir or 'package defaults'}")
        loader = ConfigLoader(config_dir, logger=self.logger)
        if config_dir:
            # A fresh --config-dir gets the default file to edit
            loader.create_default_config()
        config = loader.load_scan_config()
        if args.vendor_db:
            config.vendor_db_path = args.vendor_db
        return config

    def _fatal(self, error: Exception, error_type: ErrorType, operation: str, **details) -> int:
        context = ErrorContext(
            error_type=error_type,
            operation=operation,
            component="startup",
            additional_info=details,
        )
        self.error_handler.report_fatal(error, context)
        return 1

    def _print_summary(self, machine: SessionStateMachine) -> None:
        results = machine.results
        if results is None:
            return

        self.logger.section(f"Hosts on {machine.address.network}")
        self.logger.table_header(SUMMARY_HEADERS, SUMMARY_WIDTHS)
        for host in results:
            self.logger.table_row([host.ip_address, host.hardware_address, host.vendor or "-"],
                                  SUMMARY_WIDTHS)
        self.logger.success(f"{len(results)} hosts answered", interface=machine.interface.name)

    def build_session(self, config: ScanConfig, vendors: VendorDatabase,
                      interfaces: List[NetworkInterface]) -> SessionStateMachine:
        return SessionStateMachine(
            interfaces,
            vendors,
            open_channel=ArpChannel.open,
            read_timeout=config.read_timeout,
            logger=self.logger,
        )

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the LAN discovery application.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, non-zero for failure)
        """
        try:
            config = self._load_config(args)
        except ConfigurationError as e:
            return self._fatal(e, ErrorType.CONFIGURATION_ERROR, "load_config",
                               config_dir=args.config_dir)

        try:
            vendors = VendorDatabase.load(config.vendor_db_path)
        except VendorDatabaseError as e:
            return self._fatal(e, ErrorType.VENDOR_DATABASE_ERROR, "load_vendor_database",
                               path=config.vendor_db_path)
        self.logger.debug(f"Vendor database ready with {len(vendors)} prefixes",
                          path=config.vendor_db_path)

        try:
            interfaces = list_interfaces(include_down=config.include_down_interfaces)
        except InterfaceEnumerationError as e:
            return self._fatal(e, ErrorType.INTERFACE_ERROR, "list_interfaces")
        self.logger.debug(f"{len(interfaces)} interfaces available")

        self.machine = self.build_session(config, vendors, interfaces)
        ui = TerminalUI(self.machine, tick_interval_ms=config.tick_interval_ms, logger=self.logger)

        hold_output()
        try:
            ui.run()
        except curses.error as e:
            self.logger.error("Failed to initialise program.", exception=e)
            return 1
        finally:
            self.machine.close()
            release_output()
        self.logger.debug("Session closed", stage=self.machine.stage.value)

        if config.print_summary:
            self._print_summary(self.machine)
        return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="lan_discovery",
        description="Interactive ARP host discovery on a local network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keys:
  up/down      move the selection
  enter        confirm the selection or dismiss a message
  q, ctrl+c    quit

Examples:
  sudo python -m lan_discovery
  sudo python -m lan_discovery --vendor-db /usr/share/wireshark/manuf
        """
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        help="Directory containing scan_config.yml, written with defaults when missing. "
             "Defaults to lan_discovery/config/"
    )

    parser.add_argument(
        "--vendor-db",
        type=str,
        help="Vendor prefix database, overrides vendor_db_path from the configuration"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"LAN Discovery {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the LAN discovery tool.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    app = LanDiscoveryApp()
    try:
        return app.run(args)
    except KeyboardInterrupt:
        app.logger.warning("Interrupted before the session started")
        return 130
    except LanDiscoveryError as e:
        app.logger.error(f"LAN discovery failed: {str(e)}", exception=e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
