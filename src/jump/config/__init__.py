"""
Configuration management package for jump.

This package provides configuration parsing, validation, and saving
functionality for jump.
"""

from .parser import (
    ConfigParser,
    ConfigurationError,
    load_config,
    save_config
)

__all__ = [
    'ConfigParser',
    'ConfigurationError',
    'load_config',
    'save_config'
]
