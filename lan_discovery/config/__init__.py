"""
Configuration module for the LAN discovery tool.
Provides loading and validation of the scan configuration.
"""

from .config_loader import ConfigLoader, ScanConfig, DEFAULT_VENDOR_DB_PATH

__all__ = ['ConfigLoader', 'ScanConfig', 'DEFAULT_VENDOR_DB_PATH']
