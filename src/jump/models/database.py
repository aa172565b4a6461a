"""
Visit database data models for jump.

The visit database maps absolute directory paths to the number of times each
directory has been recorded as visited. It lives in memory for the duration
of one command; loading and saving is handled by
:mod:`jump.storage.database_store`.
"""

from typing import Dict, List, Any
from pydantic import BaseModel, Field, field_validator


# Counts are stored as signed 32-bit integers on disk
MAX_VISIT_COUNT = 2 ** 31 - 1


class VisitRecord(BaseModel):
    """
    A single entry of the visit database.

    Attributes:
        path: Absolute directory path, treated as an opaque string
        count: Number of recorded visits
    """

    path: str = Field(..., description="Absolute directory path")
    count: int = Field(..., ge=0, le=MAX_VISIT_COUNT, description="Number of recorded visits")

    def __str__(self) -> str:
        return f"{self.path}: {self.count}"


class VisitDatabase(BaseModel):
    """
    In-memory mapping of directory path to visit count.

    Counts only ever grow by one per recorded visit. The only way to lower
    them is :meth:`reset`, which clears the whole database.

    Attributes:
        visits: Mapping of directory path to visit count
    """

    visits: Dict[str, int] = Field(default_factory=dict, description="Directory path to visit count")

    @field_validator('visits', mode='before')
    @classmethod
    def validate_visits(cls, v) -> Dict[str, int]:
        """Reject anything that is not a mapping of str to non-negative int32."""
        if not isinstance(v, dict):
            raise ValueError(f"visits must be a mapping, got {type(v).__name__}")

        for path, count in v.items():
            if not isinstance(path, str):
                raise ValueError(f"Directory path must be a string, got {type(path).__name__}")
            # bool is an int subclass but never a valid count
            if isinstance(count, bool) or not isinstance(count, int):
                raise ValueError(f"Visit count for '{path}' must be an integer, got {type(count).__name__}")
            if count < 0 or count > MAX_VISIT_COUNT:
                raise ValueError(f"Visit count for '{path}' out of range: {count}")

        return dict(v)

    def record_visit(self, path: str) -> int:
        """
        Record one visit to a directory.

        Args:
            path: Directory that was visited

        Returns:
            The visit count after recording
        """
        count = self.visits.get(path, 0) + 1
        self.visits[path] = count
        return count

    def reset(self) -> None:
        """Forget every recorded directory."""
        self.visits.clear()

    def count(self, path: str) -> int:
        """Get the visit count of a directory, 0 if it was never recorded."""
        return self.visits.get(path, 0)

    def paths(self) -> List[str]:
        """Get all known directory paths in no particular order."""
        return list(self.visits.keys())

    def records(self) -> List[VisitRecord]:
        """Get all entries as VisitRecords, sorted by path."""
        return [VisitRecord(path=path, count=count) for path, count in sorted(self.visits.items())]

    def to_mapping(self) -> Dict[str, int]:
        """Get a copy of the raw path to count mapping."""
        return dict(self.visits)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> 'VisitDatabase':
        """Create a VisitDatabase from a raw path to count mapping."""
        return cls(visits=mapping)

    def __contains__(self, path: object) -> bool:
        return path in self.visits

    def __len__(self) -> int:
        return len(self.visits)

    def __str__(self) -> str:
        return f"VisitDatabase({len(self.visits)} directories)"
