"""
Configuration loader for the LAN discovery tool.
Handles loading and validation of the YAML scan configuration with fallback to defaults.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..utils.logger import Logger, get_logger

DEFAULT_VENDOR_DB_PATH = "/lib/ascan/ouidb.txt"


@dataclass
class ScanConfig:
    """Configuration for an interactive scan session."""
    vendor_db_path: str = DEFAULT_VENDOR_DB_PATH
    read_timeout_ms: int = 250
    tick_interval_ms: int = 1
    include_down_interfaces: bool = True
    print_summary: bool = True

    @property
    def read_timeout(self) -> float:
        return self.read_timeout_ms / 1000.0


class ConfigLoader:
    """
    Loads and validates the YAML scan configuration.
    Provides fallback to the default configuration when the file is missing.
    """

    def __init__(self, config_dir: Optional[str] = None, logger: Optional[Logger] = None):
        """
        Args:
            config_dir: Directory holding scan_config.yml, defaults to this package
            logger: Logger for validation warnings
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent
        else:
            self.config_dir = Path(config_dir)

        self.logger = logger or get_logger(__name__)

    def load_scan_config(self, config_file: str = "scan_config.yml") -> ScanConfig:
        """
        Load the scan configuration from a YAML file.

        Args:
            config_file: Name of the configuration file

        Returns:
            ScanConfig object with loaded or default configuration
        """
        config_path = self.config_dir / config_file

        if not config_path.exists():
            self.logger.warning(f"Scan config file not found at {config_path}. Using default configuration.")
            return ScanConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing scan config file {config_path}: {e}")
            self.logger.warning("Using default scan configuration.")
            return ScanConfig()
        except OSError as e:
            self.logger.error(f"Cannot read scan config file {config_path}: {e}")
            self.logger.warning("Using default scan configuration.")
            return ScanConfig()

        if not isinstance(config_data, dict) or not isinstance(config_data.get('scan'), dict):
            self.logger.warning(f"Invalid scan config structure in {config_path}. Using default configuration.")
            return ScanConfig()

        scan_data = config_data['scan']
        defaults = ScanConfig()

        return ScanConfig(
            vendor_db_path=self._validate_path(scan_data.get('vendor_db_path', defaults.vendor_db_path),
                                               'vendor_db_path', defaults.vendor_db_path),
            read_timeout_ms=self._validate_positive_int(scan_data.get('read_timeout_ms', defaults.read_timeout_ms),
                                                        'read_timeout_ms', defaults.read_timeout_ms),
            tick_interval_ms=self._validate_positive_int(scan_data.get('tick_interval_ms', defaults.tick_interval_ms),
                                                         'tick_interval_ms', defaults.tick_interval_ms),
            include_down_interfaces=self._validate_bool(
                scan_data.get('include_down_interfaces', defaults.include_down_interfaces),
                'include_down_interfaces', defaults.include_down_interfaces),
            print_summary=self._validate_bool(scan_data.get('print_summary', defaults.print_summary),
                                              'print_summary', defaults.print_summary),
        )

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """Return ``value`` as a positive int, or ``default`` with a warning."""
        try:
            if isinstance(value, bool):
                raise TypeError(field_name)
            int_value = int(value)
        except (ValueError, TypeError):
            self._reject(field_name, value, "an integer", default)
            return default
        if int_value <= 0:
            self._reject(field_name, value, "positive", default)
            return default
        return int_value

    def _reject(self, field_name: str, value: Any, expected: str, default: Any) -> None:
        self.logger.warning(f"Invalid {field_name} {value!r} in scan config, expected {expected}. "
                            f"Using default: {default}")

    def _validate_bool(self, value: Any, field_name: str, default: bool) -> bool:
        if isinstance(value, bool):
            return value
        self._reject(field_name, value, "true or false", default)
        return default

    def _validate_path(self, value: Any, field_name: str, default: str) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        self._reject(field_name, value, "a path", default)
        return default

    def create_default_config(self, config_file: str = "scan_config.yml") -> None:
        """Create the default configuration file if it does not exist."""
        config_path = self.config_dir / config_file
        if config_path.exists():
            return

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.dump({'scan': asdict(ScanConfig())}, f, default_flow_style=False, indent=2)
            self.logger.info(f"Created default scan config at {config_path}")
        except OSError as e:
            self.logger.error(f"Failed to create default scan config: {e}")
