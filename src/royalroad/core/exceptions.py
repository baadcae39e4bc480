"""
Exceptions raised by the Royal Road genetic algorithm.

The error surface is deliberately small: the engine runs entirely in memory,
so everything here signals either a bad configuration or a broken invariant.
"""

from typing import Any, Dict, Optional


class RoyalRoadError(Exception):
    """Base exception for Royal Road errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(RoyalRoadError, ValueError):
    """Raised when an experiment configuration cannot be run."""


class SchemaIndexError(RoyalRoadError, IndexError):
    """Raised when a segment index lies outside the active schema table."""

    def __init__(self, index: int, segment_count: int):
        super().__init__(
            f"Schema segment index {index} out of range "
            f"(table has {segment_count} segments)",
            details={"index": index, "segment_count": segment_count}
        )
        self.index = index
        self.segment_count = segment_count


class PopulationError(RoyalRoadError):
    """Raised when a population operation is not meaningful in its current state."""
