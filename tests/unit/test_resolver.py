"""
Unit tests for the query resolver.

Tests the literal-path fast path, regex matching against known directories,
the lexicographic tie-break and invalid pattern handling.
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from jump.models.database import VisitDatabase
from jump.tools.resolver import DirectoryResolver, InvalidPatternError, resolve


def _never_exists(path: str) -> bool:
    return False


class TestDirectoryResolver:
    """Test cases for DirectoryResolver."""

    def setup_method(self):
        """Set up test fixtures."""
        self.database = VisitDatabase.from_mapping({
            "/home/alice/proj": 5,
            "/home/alice/projects": 1,
            "/var/log": 9,
        })
        self.resolver = DirectoryResolver(self.database, path_exists=_never_exists)

    def test_root_is_returned_unchanged(self):
        """Test '/' always resolves to itself."""
        exists_check = MagicMock(return_value=False)
        resolver = DirectoryResolver(self.database, path_exists=exists_check)

        assert resolver.resolve("/") == "/"
        exists_check.assert_not_called()

    def test_root_with_empty_database(self):
        """Test '/' resolves to itself regardless of database contents."""
        resolver = DirectoryResolver(VisitDatabase(), path_exists=_never_exists)
        assert resolver.resolve("/") == "/"

    def test_lexicographically_first_match_wins(self):
        """Test the smallest matching path is chosen, not the most visited."""
        assert self.resolver.resolve("proj") == "/home/alice/proj"

    def test_visit_count_is_not_used_for_ranking(self):
        """Test a far more visited match still loses to a smaller path."""
        db = VisitDatabase.from_mapping({"/b/src": 1000, "/a/src": 1})
        resolver = DirectoryResolver(db, path_exists=_never_exists)

        assert resolver.resolve("src") == "/a/src"

    def test_no_match_returns_query(self):
        """Test an unmatched query falls back to itself."""
        assert self.resolver.resolve("zzz-no-match") == "zzz-no-match"

    def test_empty_database_returns_query(self):
        """Test any query falls back to itself with no known directories."""
        resolver = DirectoryResolver(VisitDatabase(), path_exists=_never_exists)
        assert resolver.resolve("proj") == "proj"

    def test_pattern_matches_anywhere(self):
        """Test matching is a search, not a full-string match."""
        assert self.resolver.resolve("log") == "/var/log"

    def test_anchors_in_query_are_honoured(self):
        """Test an anchored query only matches at the anchor."""
        assert self.resolver.resolve("projects$") == "/home/alice/projects"
        assert self.resolver.resolve("^/var") == "/var/log"
        assert self.resolver.resolve("^proj") == "^proj"

    def test_regex_metacharacters_are_not_escaped(self):
        """Test queries are used as regular expressions verbatim."""
        assert self.resolver.resolve("a.ice/proj.+") == "/home/alice/projects"

    def test_empty_query_matches_everything(self):
        """Test an empty pattern selects the smallest known directory."""
        assert self.resolver.resolve("") == "/home/alice/proj"

    def test_empty_query_with_empty_database(self):
        """Test an empty query with no known directories stays empty."""
        resolver = DirectoryResolver(VisitDatabase(), path_exists=_never_exists)
        assert resolver.resolve("") == ""

    def test_invalid_pattern_raises(self):
        """Test an unbalanced group fails instead of matching literally."""
        with pytest.raises(InvalidPatternError, match="Invalid pattern"):
            self.resolver.resolve("proj(")

    def test_invalid_pattern_raises_even_without_entries(self):
        """Test pattern errors are reported with an empty database too."""
        resolver = DirectoryResolver(VisitDatabase(), path_exists=_never_exists)

        with pytest.raises(InvalidPatternError):
            resolver.resolve("[unclosed")

    def test_existing_path_wins_over_pattern(self):
        """Test an existing path is returned even if it matches entries."""
        resolver = DirectoryResolver(self.database, path_exists=lambda p: p == "proj")
        assert resolver.resolve("proj") == "proj"

    def test_existing_path_skips_pattern_compilation(self):
        """Test an existing path is returned even if it is not a valid regex."""
        resolver = DirectoryResolver(self.database, path_exists=lambda p: True)
        assert resolver.resolve("weird(dir") == "weird(dir"

    def test_find_candidates_sorted(self):
        """Test every match is returned in codepoint order."""
        candidates = self.resolver.find_candidates("alice")
        assert candidates == ["/home/alice/proj", "/home/alice/projects"]

    def test_find_candidates_codepoint_order(self):
        """Test uppercase sorts before lowercase, as in codepoint order."""
        db = VisitDatabase.from_mapping({"/x/b": 1, "/x/B": 1, "/x/a": 1})
        resolver = DirectoryResolver(db, path_exists=_never_exists)

        assert resolver.find_candidates("/x/") == ["/x/B", "/x/a", "/x/b"]


class TestResolveWithFilesystem:
    """Test the literal-path fast path against a real directory."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.existing = Path(self.temp_dir) / "proj"
        self.existing.mkdir()

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_existing_directory_returned_unchanged(self):
        """Test the module-level resolve honours existing paths."""
        db = VisitDatabase.from_mapping({str(self.existing) + "-other": 3})
        query = str(self.existing)

        assert resolve(query, db) == query

    def test_missing_directory_uses_database(self):
        """Test a non-existent query falls through to matching."""
        known = str(Path(self.temp_dir) / "elsewhere" / "proj-known")
        db = VisitDatabase.from_mapping({known: 1})

        assert resolve("proj-kn", db) == known
