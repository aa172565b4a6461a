"""
Location of jump's on-disk artifacts.

Everything jump persists lives in one per-user application data directory,
resolved the way the host platform expects and created on first use.
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Union


logger = logging.getLogger(__name__)


APP_DIR_NAME = "jump"
CONFIG_FILE_NAME = "config.yaml"
DATABASE_FILE_NAME = "database.jdb"
LOCK_FILE_NAME = "database.lock"


def platform_data_home() -> Path:
    """
    Get the per-user application data directory of the current platform.

    Returns:
        ``%APPDATA%`` on Windows, ``~/Library/Application Support`` on macOS,
        and ``$XDG_DATA_HOME`` (falling back to ``~/.local/share``) elsewhere
    """
    if sys.platform.startswith('win'):
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata)
        return Path.home() / 'AppData' / 'Roaming'

    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support'

    xdg_data_home = os.environ.get('XDG_DATA_HOME', '').strip()
    # Relative values are invalid per the XDG spec and must be ignored
    if xdg_data_home and os.path.isabs(xdg_data_home):
        return Path(xdg_data_home)
    return Path.home() / '.local' / 'share'


def data_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve and create jump's data directory.

    Args:
        override: Use this directory instead of the platform default

    Returns:
        Path to the existing data directory

    Raises:
        OSError: If the directory cannot be created
    """
    if override is not None:
        directory = Path(override).expanduser()
    else:
        directory = platform_data_home() / APP_DIR_NAME

    directory.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Using data directory: {directory}")
    return directory


def config_path(directory: Path) -> Path:
    """Path of the YAML config artifact inside a data directory."""
    return directory / CONFIG_FILE_NAME


def database_path(directory: Path) -> Path:
    """Path of the binary visit database inside a data directory."""
    return directory / DATABASE_FILE_NAME


def lock_path(directory: Path) -> Path:
    """Path of the lock file guarding database mutations."""
    return directory / LOCK_FILE_NAME
