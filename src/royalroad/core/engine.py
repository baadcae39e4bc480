"""
Genetic Algorithm Engine for the Royal Road experiment.

This module implements the generational loop of the experiment:

1. Initialize the population with random individuals and sort it by fitness.
2. Carry the fittest `elite_size` individuals into the next generation.
3. Mate the remaining slots in pairs, selecting parents from the full
   population, with possible crossover followed by mutation.
4. If a mating produces an optimal individual, stop and report the
   generation in which it was found.
5. Otherwise the elite plus the offspring form the next generation.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

import logfire
import numpy as np
from pydantic import ValidationError

from src.royalroad.core.config import RoyalRoadConfig
from src.royalroad.core.exceptions import ConfigurationError
from src.royalroad.core.individual import Individual
from src.royalroad.core.population import Population, SchemaStats
from src.royalroad.core.schema import SchemaKind, SchemaTable, STRING_LENGTH


class EngineState(str, Enum):
    """Lifecycle of an engine run."""
    INITIALIZING = "initializing"
    EVOLVING = "evolving"
    TERMINATED = "terminated"


@dataclass
class EvolutionResult:
    """Outcome of a run, as consumed by the reporting layer."""

    schema_kind: SchemaKind
    optimal_score: int
    found: bool
    generations_to_solve: int
    best_individual: Optional[Individual] = None
    pct_schema8_history: List[int] = field(default_factory=list)
    pct_schema12_history: List[int] = field(default_factory=list)
    pct_schema14_history: List[int] = field(default_factory=list)


class RoyalRoadEngine:
    """
    Runs the Royal Road genetic algorithm until an optimum is found or the
    generation cap is reached.

    All randomness comes from a single generator owned by the engine, so a
    seeded configuration reproduces a run exactly.
    """

    def __init__(
        self,
        config: RoyalRoadConfig,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the engine and its first population.

        Args:
            config: Run configuration
            rng: Optional random generator; defaults to one seeded from
                `config.random_seed`
            logger: Optional logger instance

        Raises:
            ConfigurationError: If the evolution parameters are inconsistent
        """
        try:
            config.validate_consistency()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid Royal Road configuration: {e}") from e

        self.config = config
        self.logger = logger or self._setup_logger()
        self.rng = rng if rng is not None else np.random.default_rng(config.random_seed)

        self.state = EngineState.INITIALIZING
        self.schema = SchemaTable.create(config.schema_kind)
        self.optimal_score = self.schema.optimal_score

        self.generation = 0
        self.solution_generation: Optional[int] = None
        self.optimal_individual: Optional[Individual] = None
        self.schema_history: List[SchemaStats] = []
        self.start_time: Optional[datetime] = None

        self.population = self._initialize_population()
        self.state = EngineState.EVOLVING

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("royalroad.engine")
        if self.config.logging.enable_logging:
            logger.setLevel(getattr(logging, self.config.logging.log_level))
        else:
            logger.setLevel(logging.WARNING)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def _initialize_population(self) -> Population:
        """Fill a population with random individuals."""
        with logfire.span("Initialize Population", schema_kind=self.schema.kind.value):
            population = Population()
            for _ in range(self.config.evolution.population_size):
                population.add_individual(Individual.random(self.schema, self.rng))
            population.setup()

            self.logger.debug(
                f"Initialized population with {len(population)} individuals "
                f"(best score {population.best.score})"
            )
            return population

    def find_optimal(self) -> EvolutionResult:
        """
        Evolve generations until an optimal individual appears or the cap is hit.

        Returns:
            The run result
        """
        params = self.config.evolution

        with logfire.span("Royal Road Evolution",
                          schema_kind=self.schema.kind.value,
                          population_size=params.population_size,
                          generations=params.generations):
            self.start_time = datetime.now()
            self.logger.info(
                f"Starting evolution: schema {self.schema.kind.value}, "
                f"optimal score {self.optimal_score}"
            )

            while self.state == EngineState.EVOLVING:
                gen = self.generation
                self.schema_history.append(self.population.get_schema_stats())

                if self._should_log(gen):
                    self._log_progress(gen)

                with logfire.span("Generation", generation=gen):
                    solved = self.next_generation()

                if solved:
                    self.solution_generation = gen
                    self.state = EngineState.TERMINATED
                    self.logger.info(f"Optimal individual found in generation {gen}")
                    logfire.info("Optimal individual found",
                                 generation=gen,
                                 bit_string=self.optimal_individual.bit_string)
                    break

                if self.generation >= params.generations:
                    self.state = EngineState.TERMINATED
                    self.logger.info(
                        f"No optimal individual within {params.generations} generations"
                    )

            elapsed_time = datetime.now() - self.start_time
            self.logger.info(f"Evolution completed in {elapsed_time}")

            return self.result()

    def next_generation(self) -> bool:
        """
        Build the next generation from the current one.

        Returns:
            True if a mating produced an optimal individual; the partially
            built generation is discarded in that case
        """
        params = self.config.evolution
        new_population = Population()

        for individual in self.population.fittest(params.elite_size):
            new_population.add_individual(individual)

        for _ in range(params.mating_rounds):
            p1 = self.population.select(self.rng)
            p2 = self.population.select(self.rng)

            c1, c2 = self.mate(p1, p2)

            if c1.score == self.optimal_score or c2.score == self.optimal_score:
                self.optimal_individual = c1 if c1.score == self.optimal_score else c2
                return True

            new_population.add_individual(c1)
            new_population.add_individual(c2)

        new_population.setup()
        self.population = new_population
        self.generation += 1

        return False

    def mate(self, p1: Individual, p2: Individual) -> Tuple[Individual, Individual]:
        """Produce two children, crossing over with probability `crossover_rate`."""
        if self.rng.random() < self.config.evolution.crossover_rate:
            c1, c2 = self.crossover(p1, p2)
        else:
            c1, c2 = p1, p2

        return self.mutate(c1), self.mutate(c2)

    def crossover(self, p1: Individual, p2: Individual) -> Tuple[Individual, Individual]:
        """Single-point crossover at a random point in [1, STRING_LENGTH - 2]."""
        # Points 0 and STRING_LENGTH - 1 would be a copy or a one-bit swap
        point = int(self.rng.integers(1, STRING_LENGTH - 1))
        return self.crossover_at(p1, p2, point)

    def crossover_at(
        self, p1: Individual, p2: Individual, point: int
    ) -> Tuple[Individual, Individual]:
        """Swap the tails of two parents at `point`."""
        s1, s2 = p1.bit_string, p2.bit_string
        c1 = Individual(s1[:point] + s2[point:], self.schema)
        c2 = Individual(s2[:point] + s1[point:], self.schema)
        return c1, c2

    def mutate(self, individual: Individual) -> Individual:
        """Flip each bit with probability `mutation_rate`."""
        rate = self.config.evolution.mutation_rate
        if rate == 0:
            return individual

        flips = self.rng.random(STRING_LENGTH) < rate
        bits = "".join(
            ("1" if bit == "0" else "0") if flip else bit
            for bit, flip in zip(individual.bit_string, flips)
        )
        return Individual(bits, self.schema)

    def result(self) -> EvolutionResult:
        """Summarize the run so far."""
        found = self.solution_generation is not None
        generations_to_solve = self.solution_generation if found else 0
        history = self.schema_history[:generations_to_solve] if found else self.schema_history

        if found:
            best = self.optimal_individual
        else:
            best = self.population.best

        return EvolutionResult(
            schema_kind=self.schema.kind,
            optimal_score=self.optimal_score,
            found=found,
            generations_to_solve=generations_to_solve,
            best_individual=best,
            pct_schema8_history=[stats[0] for stats in history],
            pct_schema12_history=[stats[1] for stats in history],
            pct_schema14_history=[stats[2] for stats in history],
        )

    def _should_log(self, generation: int) -> bool:
        return (self.config.logging.enable_logging
                and generation % self.config.logging.log_interval == 0)

    def _log_progress(self, generation: int) -> None:
        """Log evolution progress."""
        pct8, pct12, pct14 = self.schema_history[-1]
        best_score = self.population.best.score
        avg_score = self.population.average_score

        self.logger.info(
            f"Generation {generation}: "
            f"Best: {best_score}, "
            f"Avg: {avg_score:.2f}, "
            f"s8: {pct8}%, s12: {pct12}%, s14: {pct14}%"
        )
        logfire.info("Evolution Progress",
                     evolution_generation=generation,
                     best_score=best_score,
                     avg_score=avg_score,
                     pct_schema8=pct8,
                     pct_schema12=pct12,
                     pct_schema14=pct14)
