"""
Individuals for the Royal Road genetic algorithm.

An individual is a 64-bit chromosome held as a string of '0'/'1' characters.
Its fitness and schema flags are derived once, at construction, from the
schema table of the run; individuals are never modified afterwards.
"""

from typing import Any, Dict
from dataclasses import dataclass, field

import numpy as np

from src.royalroad.core.schema import (
    SchemaTable,
    STRING_LENGTH,
    SCORE_MULTIPLIER,
    SCHEMA8_INDEX,
    SCHEMA12_INDEX,
    SCHEMA14_INDEX,
)

_BITS = frozenset("01")


@dataclass(frozen=True)
class Individual:
    """
    A candidate solution: a bit string plus its derived fitness.

    Attributes:
        bit_string: 64 characters, each '0' or '1'
        schema: Schema table the fitness was computed against
        score: 1 when no segment is complete, otherwise 10x the raw schema sum
        has_schema8: Segment 7 is complete
        has_schema12: Segment 11 is complete
        has_schema14: Segment 13 is complete
    """

    bit_string: str
    schema: SchemaTable = field(repr=False, compare=False)
    score: int = field(init=False)
    has_schema8: bool = field(init=False, default=False)
    has_schema12: bool = field(init=False, default=False)
    has_schema14: bool = field(init=False, default=False)

    def __post_init__(self):
        if len(self.bit_string) != STRING_LENGTH or not set(self.bit_string) <= _BITS:
            raise ValueError(
                f"Bit string must be {STRING_LENGTH} characters of '0'/'1', "
                f"got {self.bit_string!r}"
            )
        self._evaluate()

    def _evaluate(self) -> None:
        """Royal Road fitness: sum the weights of every complete segment."""
        raw_score = 0
        flags = {SCHEMA8_INDEX: False, SCHEMA12_INDEX: False, SCHEMA14_INDEX: False}

        for idx in range(self.schema.segment_count):
            part_score = self.schema.check(idx, self.bit_string)
            if part_score > 0:
                if idx in flags:
                    flags[idx] = True
                raw_score += part_score

        # Nobody gets a zero score, so every individual can still reproduce
        score = raw_score * SCORE_MULTIPLIER if raw_score > 0 else 1

        object.__setattr__(self, "score", score)
        object.__setattr__(self, "has_schema8", flags[SCHEMA8_INDEX])
        object.__setattr__(self, "has_schema12", flags[SCHEMA12_INDEX])
        object.__setattr__(self, "has_schema14", flags[SCHEMA14_INDEX])

    @classmethod
    def random(cls, schema: SchemaTable, rng: np.random.Generator) -> "Individual":
        """Create an individual whose bits are drawn independently and uniformly."""
        bits = rng.integers(0, 2, size=STRING_LENGTH)
        return cls("".join("1" if bit else "0" for bit in bits), schema)

    @property
    def is_optimal(self) -> bool:
        return self.score == self.schema.optimal_score

    def to_dict(self) -> Dict[str, Any]:
        """Convert individual to dictionary representation."""
        return {
            "bit_string": self.bit_string,
            "schema_kind": self.schema.kind.value,
            "score": self.score,
            "has_schema8": self.has_schema8,
            "has_schema12": self.has_schema12,
            "has_schema14": self.has_schema14,
        }
