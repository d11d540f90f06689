"""
Configuration package for the hostel income ledger.

Contains environment settings and logging configuration.
"""

from hostel_ledger.config.settings import Settings, get_settings, settings
from hostel_ledger.config.logging import setup_logging

__all__ = ['Settings', 'get_settings', 'settings', 'setup_logging']
