"""
Core Module - Configuration, Settings and Errors
"""
from .config import BASE_DIR, Settings, settings
from .exceptions import ControlConnectionError, ParseError, StatsError

__all__ = [
    "BASE_DIR",
    "Settings",
    "settings",
    "StatsError",
    "ControlConnectionError",
    "ParseError",
]
