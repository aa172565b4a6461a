"""
Binary persistence for the visit database.

The database is stored as a single msgpack map of ``str -> int`` with no
header or version marker. It is rewritten in full on every mutation by
truncating the file in place, so a crash in the middle of a write can leave a
corrupt store behind; loading such a file fails instead of guessing.
"""

import logging
from pathlib import Path
from typing import Union

import msgpack
from pydantic import ValidationError

from ..models.database import VisitDatabase


logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when the visit database cannot be read, decoded or written."""
    pass


class DatabaseStore:
    """
    Loads and saves a VisitDatabase at a fixed path.

    A missing or zero-length file is treated as an empty database, which is
    written out immediately so the artifact always exists after a load.
    Anything else that does not decode to a mapping of path to visit count
    raises :class:`DatabaseError`; there is no recovery or backup path.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: Location of the database file
        """
        self.path = Path(path)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load(self) -> VisitDatabase:
        """
        Load the database, creating an empty one when none exists yet.

        Returns:
            The loaded VisitDatabase

        Raises:
            DatabaseError: If the file cannot be read, does not decode, or
                decodes to something other than a path to count mapping
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            data = b''
        except OSError as e:
            raise DatabaseError(f"Cannot read database file {self.path}: {e}") from e

        if not data:
            self.logger.debug(f"No database at {self.path}, initializing an empty one")
            database = VisitDatabase()
            self.save(database)
            return database

        try:
            raw = msgpack.unpackb(data, raw=False, strict_map_key=True)
        except (msgpack.UnpackException, ValueError) as e:
            raise DatabaseError(f"Corrupt database file {self.path}: {e}") from e

        try:
            database = VisitDatabase.from_mapping(raw)
        except ValidationError as e:
            raise DatabaseError(f"Unexpected database content in {self.path}: {e}") from e

        self.logger.debug(f"Loaded {len(database)} directories from {self.path}")
        return database

    def save(self, database: VisitDatabase) -> None:
        """
        Overwrite the database file with the full contents of ``database``.

        Args:
            database: Database to persist

        Raises:
            DatabaseError: If the database cannot be encoded or the file
                cannot be written
        """
        try:
            payload = msgpack.packb(database.to_mapping(), use_bin_type=True)
        except (UnicodeEncodeError, ValueError, TypeError) as e:
            raise DatabaseError(f"Cannot encode database for {self.path}: {e}") from e

        try:
            with open(self.path, 'wb') as f:
                f.write(payload)
        except OSError as e:
            raise DatabaseError(f"Cannot write database file {self.path}: {e}") from e

        self.logger.debug(f"Saved {len(database)} directories to {self.path}")


def load_database(path: Union[str, Path]) -> VisitDatabase:
    """
    Convenience function to load the visit database.

    Args:
        path: Location of the database file

    Returns:
        The loaded VisitDatabase

    Raises:
        DatabaseError: If the database cannot be loaded
    """
    return DatabaseStore(path).load()


def save_database(path: Union[str, Path], database: VisitDatabase) -> None:
    """
    Convenience function to save the visit database.

    Args:
        path: Location of the database file
        database: Database to persist

    Raises:
        DatabaseError: If the database cannot be written
    """
    DatabaseStore(path).save(database)
