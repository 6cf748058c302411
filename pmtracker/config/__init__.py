"""
Configuration package for the maintenance tracker.

Contains environment settings and logging configuration.
"""

from pmtracker.config.settings import Settings, get_settings, settings
from pmtracker.config.logging import get_logger, setup_logging

__all__ = ['Settings', 'get_settings', 'settings', 'get_logger', 'setup_logging']
