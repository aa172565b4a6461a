"""
Data models for jump.

This module contains the core data structures used throughout the system.
"""

from .config import JumpConfig
from .database import VisitDatabase, VisitRecord

__all__ = ['JumpConfig', 'VisitDatabase', 'VisitRecord']
