"""
Query resolution for jump.

This module turns what the user typed after the jump function into the
directory the shell should change into. A query that already names an
existing path is used as is; anything else is a regular expression searched
in every known directory, and the lexicographically smallest match wins.

Visit counts are deliberately not part of the ranking: among matches, the
result depends on the path strings alone.
"""

import os
import re
import logging
from typing import Callable, List

from ..models.database import VisitDatabase


logger = logging.getLogger(__name__)


class InvalidPatternError(Exception):
    """Raised when a query is not a valid regular expression."""
    pass


class DirectoryResolver:
    """
    Resolves queries against a visit database.

    The only filesystem access is a single existence check of the query
    itself; known directories are never checked for existence.
    """

    def __init__(self, database: VisitDatabase, path_exists: Callable[[str], bool] = os.path.exists):
        """
        Initialize the resolver.

        Args:
            database: Known directories to match against
            path_exists: Filesystem check used for the literal-path check
        """
        self.database = database
        self.path_exists = path_exists

    def resolve(self, query: str) -> str:
        """
        Resolve a query to a directory.

        Args:
            query: Literal path or regular expression

        Returns:
            ``query`` itself if it is ``/`` or an existing path, otherwise the
            lexicographically first known directory matching it, otherwise
            ``query`` unchanged

        Raises:
            InvalidPatternError: If ``query`` is not an existing path and does
                not compile as a regular expression
        """
        if query == '/' or self.path_exists(query):
            logger.debug(f"Query is an existing path: {query}")
            return query

        candidates = self.find_candidates(query)
        if not candidates:
            logger.debug(f"No known directory matches '{query}'")
            return query

        logger.debug(f"Resolved '{query}' to {candidates[0]} ({len(candidates)} candidates)")
        return candidates[0]

    def find_candidates(self, query: str) -> List[str]:
        """
        Find every known directory matching a pattern.

        The pattern may match anywhere in the path; anchors in the query
        itself are honoured.

        Args:
            query: Regular expression to search for

        Returns:
            Matching directories sorted by codepoint order

        Raises:
            InvalidPatternError: If ``query`` does not compile
        """
        pattern = self._compile_pattern(query)
        return sorted(path for path in self.database.paths() if pattern.search(path))

    def _compile_pattern(self, query: str) -> re.Pattern:
        """
        Compile a query as a regular expression.

        Args:
            query: Pattern string, used verbatim

        Returns:
            Compiled pattern

        Raises:
            InvalidPatternError: If the pattern is invalid
        """
        try:
            return re.compile(query)
        except re.error as e:
            raise InvalidPatternError(f"Invalid pattern '{query}': {e}") from e


def resolve(query: str, database: VisitDatabase) -> str:
    """
    Convenience function to resolve a query against a database.

    Args:
        query: Literal path or regular expression
        database: Known directories

    Returns:
        The resolved directory, or ``query`` if nothing better is known

    Raises:
        InvalidPatternError: If ``query`` is not a valid pattern
    """
    return DirectoryResolver(database).resolve(query)
