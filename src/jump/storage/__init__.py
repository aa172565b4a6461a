"""
Persistence package for jump.

This package locates jump's data directory and stores the visit database
and the lock that serializes database mutations.
"""

from .database_store import (
    DatabaseStore,
    DatabaseError,
    load_database,
    save_database
)
from .locking import exclusive_lock
from .paths import data_dir, config_path, database_path, lock_path

__all__ = [
    'DatabaseStore',
    'DatabaseError',
    'load_database',
    'save_database',
    'exclusive_lock',
    'data_dir',
    'config_path',
    'database_path',
    'lock_path'
]
