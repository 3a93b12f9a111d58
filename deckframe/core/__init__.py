"""
core/__init__.py - Shared constants and configuration.
"""

from .config import FramingConfig, DEFAULT_CONFIG

__all__ = [
    "FramingConfig",
    "DEFAULT_CONFIG",
]
