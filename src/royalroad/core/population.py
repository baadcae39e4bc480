"""
Population Management for the Royal Road Genetic Algorithm.

This module holds the ordered collection of individuals that makes up one
generation, with fitness-proportional selection, elite retrieval and the
schema-presence statistics reported per generation.
"""

from typing import Iterator, List, Tuple
import statistics

import numpy as np

from src.royalroad.core.exceptions import PopulationError
from src.royalroad.core.individual import Individual


SchemaStats = Tuple[int, int, int]


def _percentage(count: int, total: int) -> int:
    """Integer percentage rounded half-up."""
    return (200 * count + total) // (2 * total)


class Population:
    """
    An ordered collection of individuals for one generation.

    Individuals are appended freely; `setup` must be called once the
    population is complete, which sorts it from least to most fit and
    totals the scores used by roulette-wheel selection.
    """

    def __init__(self):
        self.individuals: List[Individual] = []
        self.sum_score = 0
        self._ready = False

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def add_individual(self, individual: Individual) -> None:
        """Append an individual; sort order is restored by `setup`."""
        self.individuals.append(individual)
        self._ready = False

    def setup(self) -> None:
        """Sort ascending by score and total the scores."""
        # list.sort is stable, so ties keep insertion order
        self.individuals.sort(key=lambda ind: ind.score)
        self.sum_score = sum(ind.score for ind in self.individuals)
        self._ready = True

    def _require_ready(self) -> None:
        if not self.individuals:
            raise PopulationError("Population is empty")
        if not self._ready:
            raise PopulationError("Population.setup() must be called first")

    def select(self, rng: np.random.Generator) -> Individual:
        """
        Fitness-proportional (roulette-wheel) selection.

        Draws an integer target in [0, sum_score) and walks the population
        from the least fit individual upwards, returning the first one whose
        cumulative score reaches the target. Fitter individuals own wider
        slices of the wheel, but every individual keeps a nonzero chance.
        """
        self._require_ready()

        target = int(rng.integers(0, self.sum_score))

        running_sum = 0
        for individual in self.individuals:
            running_sum += individual.score
            if running_sum >= target:
                return individual

        return self.individuals[-1]

    def fittest(self, k: int) -> List[Individual]:
        """Return the `k` highest-scoring individuals, most fit first."""
        self._require_ready()
        if not 0 <= k <= len(self.individuals):
            raise PopulationError(
                f"Cannot take {k} fittest from a population of {len(self.individuals)}"
            )
        return self.individuals[::-1][:k]

    @property
    def best(self) -> Individual:
        self._require_ready()
        return self.individuals[-1]

    @property
    def average_score(self) -> float:
        if not self.individuals:
            return 0.0
        return statistics.mean(ind.score for ind in self.individuals)

    def get_schema_stats(self) -> SchemaStats:
        """Percentage of individuals carrying schema 8, 12 and 14."""
        total = len(self.individuals)
        if total == 0:
            return (0, 0, 0)

        sch8 = sum(1 for ind in self.individuals if ind.has_schema8)
        sch12 = sum(1 for ind in self.individuals if ind.has_schema12)
        sch14 = sum(1 for ind in self.individuals if ind.has_schema14)

        return (
            _percentage(sch8, total),
            _percentage(sch12, total),
            _percentage(sch14, total),
        )
