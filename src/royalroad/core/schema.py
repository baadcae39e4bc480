"""
Royal Road Schema Tables.

A schema table is the fitness model of the Royal Road experiment: a list of
bit segments, each contributing a fixed weight when every bit inside it is 1.
Three tables are supported and a run picks exactly one of them.
"""

from typing import Dict, Tuple
from dataclasses import dataclass
from enum import Enum

from src.royalroad.core.exceptions import SchemaIndexError


STRING_LENGTH = 64
SCORE_MULTIPLIER = 10

# Segment indices whose presence is tracked for reporting
SCHEMA8_INDEX = 7
SCHEMA12_INDEX = 11
SCHEMA14_INDEX = 13


class SchemaKind(str, Enum):
    """Schema table variants."""
    ROYAL_ROAD_8 = "royal_road_8"
    ROYAL_ROAD_14 = "royal_road_14"
    OVERLAP_10 = "overlap_10"


@dataclass(frozen=True)
class SchemaSegment:
    """An inclusive bit range and the weight it is worth when all ones."""

    start_bit: int
    end_bit: int
    weight: int

    def __post_init__(self):
        if not 0 <= self.start_bit <= self.end_bit < STRING_LENGTH:
            raise ValueError(
                f"Invalid segment range [{self.start_bit}, {self.end_bit}]"
            )
        if self.weight <= 0:
            raise ValueError(f"Segment weight must be positive, got {self.weight}")

    @property
    def length(self) -> int:
        return self.end_bit - self.start_bit + 1

    def matches(self, bit_string: str) -> bool:
        """Check whether every bit of the segment is set."""
        return "0" not in bit_string[self.start_bit:self.end_bit + 1]


def _blocks(size: int, weight: int) -> Tuple[SchemaSegment, ...]:
    """Disjoint aligned blocks of `size` bits covering the whole string."""
    return tuple(
        SchemaSegment(start, start + size - 1, weight)
        for start in range(0, STRING_LENGTH, size)
    )


def _windows(size: int, step: int, weight: int) -> Tuple[SchemaSegment, ...]:
    """Sliding windows of `size` bits starting every `step` bits."""
    return tuple(
        SchemaSegment(start, start + size - 1, weight)
        for start in range(0, STRING_LENGTH - size + 1, step)
    )


_SEGMENTS: Dict[SchemaKind, Tuple[SchemaSegment, ...]] = {
    SchemaKind.ROYAL_ROAD_8: _blocks(8, 1),
    SchemaKind.ROYAL_ROAD_14: _blocks(8, 1) + _blocks(16, 2) + _blocks(32, 4),
    SchemaKind.OVERLAP_10: _windows(10, 6, 1),
}


@dataclass(frozen=True)
class SchemaTable:
    """
    Immutable table of schema segments for one SchemaKind.

    Tables are shared read-only by every fitness computation of a run. Use
    `SchemaTable.create` rather than the constructor so that repeated
    requests for the same kind hand back the same object.
    """

    kind: SchemaKind
    segments: Tuple[SchemaSegment, ...]

    @classmethod
    def create(cls, kind: SchemaKind) -> "SchemaTable":
        """Return the table for `kind`."""
        return _TABLES[SchemaKind(kind)]

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def max_raw_score(self) -> int:
        return sum(segment.weight for segment in self.segments)

    @property
    def optimal_score(self) -> int:
        """Score of an individual that completes every segment."""
        return self.max_raw_score * SCORE_MULTIPLIER

    def check(self, segment_index: int, bit_string: str) -> int:
        """
        Score a single segment against a bit string.

        Args:
            segment_index: Index into the table
            bit_string: String of '0'/'1' characters

        Returns:
            The segment weight if all of its bits are 1, otherwise 0

        Raises:
            SchemaIndexError: If the index is outside the table
        """
        if not 0 <= segment_index < self.segment_count:
            raise SchemaIndexError(segment_index, self.segment_count)

        segment = self.segments[segment_index]
        return segment.weight if segment.matches(bit_string) else 0


_TABLES: Dict[SchemaKind, SchemaTable] = {
    kind: SchemaTable(kind=kind, segments=segments)
    for kind, segments in _SEGMENTS.items()
}


def select_schema_kind(schema14: bool = False, overlap: bool = False) -> SchemaKind:
    """Map the experiment flags to a schema kind; overlap wins over schema14."""
    if overlap:
        return SchemaKind.OVERLAP_10
    if schema14:
        return SchemaKind.ROYAL_ROAD_14
    return SchemaKind.ROYAL_ROAD_8
