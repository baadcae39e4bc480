"""
Unit tests for the Royal Road evolution engine.

Tests cover:
- Engine initialization and configuration checks
- Crossover, mutation and mating
- Generation advance with elitism
- Early termination and the not-found convention
- Reproducibility of seeded runs
"""

import logging

import numpy as np
import pytest

from src.royalroad.core.config import (
    RoyalRoadConfig,
    EvolutionParameters,
    LoggingConfig,
    create_experiment_config,
)
from src.royalroad.core.engine import EngineState, RoyalRoadEngine
from src.royalroad.core.exceptions import ConfigurationError
from src.royalroad.core.individual import Individual
from src.royalroad.core.population import Population
from src.royalroad.core.schema import SchemaKind


ALL_ONES = "1" * 64
ALL_ZEROS = "0" * 64


class ScriptedRNG:
    """Stand-in generator replaying a script of draws in order."""

    def __init__(self, script):
        self.script = list(script)

    def _next(self, kind):
        expected, value = self.script.pop(0)
        assert expected == kind, f"expected a {expected} draw, engine asked for {kind}"
        return value

    def integers(self, low, high=None, size=None):
        value = self._next("integers")
        assert low <= value < high
        return value

    def random(self, size=None):
        return self._next("random")


def small_config(**evolution) -> RoyalRoadConfig:
    params = dict(population_size=4, elite_size=2, generations=10,
                  crossover_rate=0.5, mutation_rate=0.0)
    params.update(evolution)
    return RoyalRoadConfig(
        evolution=EvolutionParameters(**params),
        logging=LoggingConfig(enable_logging=False),
        random_seed=0
    )


class TestEngineInitialization:
    """Test suite for engine construction."""

    def test_initial_population(self, quiet_config):
        engine = RoyalRoadEngine(quiet_config)

        assert engine.state == EngineState.EVOLVING
        assert len(engine.population) == 128
        assert engine.generation == 0
        scores = [ind.score for ind in engine.population]
        assert scores == sorted(scores)
        assert engine.population.sum_score == sum(scores)

    @pytest.mark.parametrize("experiment,overlap,kind,optimal", [
        ("1A", False, SchemaKind.ROYAL_ROAD_8, 80),
        ("1B", False, SchemaKind.ROYAL_ROAD_14, 240),
        ("1A", True, SchemaKind.OVERLAP_10, 100),
    ])
    def test_schema_selection(self, experiment, overlap, kind, optimal):
        engine = RoyalRoadEngine(create_experiment_config(experiment, overlap, random_seed=1))
        assert engine.schema.kind == kind
        assert engine.optimal_score == optimal

    def test_seed_reproduces_population(self, quiet_config):
        a = RoyalRoadEngine(quiet_config)
        b = RoyalRoadEngine(quiet_config)
        assert [i.bit_string for i in a.population] == [i.bit_string for i in b.population]

    def test_rejects_uneven_split(self):
        """Test that an odd offspring count is refused before running."""
        config = RoyalRoadConfig(
            evolution=EvolutionParameters.model_construct(
                population_size=10, generations=5, mutation_rate=0.0,
                crossover_rate=0.7, elite_size=3
            )
        )
        with pytest.raises(ConfigurationError):
            RoyalRoadEngine(config)


class TestGeneticOperators:
    """Test suite for crossover and mutation."""

    def test_crossover_at_swaps_tails(self, quiet_config):
        engine = RoyalRoadEngine(quiet_config)
        p1 = Individual(ALL_ONES, engine.schema)
        p2 = Individual(ALL_ZEROS, engine.schema)

        c1, c2 = engine.crossover_at(p1, p2, 20)
        assert c1.bit_string == "1" * 20 + "0" * 44
        assert c2.bit_string == "0" * 20 + "1" * 44
        assert c1.score == 20
        assert c2.score == 50

    def test_crossover_point_bounds(self, quiet_config):
        """Test that crossover points stay within [1, 62]."""
        engine = RoyalRoadEngine(quiet_config)
        p1 = Individual(ALL_ZEROS, engine.schema)
        p2 = Individual(ALL_ONES, engine.schema)

        points = set()
        for _ in range(1000):
            c1, _ = engine.crossover(p1, p2)
            points.add(c1.bit_string.index("1"))

        assert min(points) >= 1
        assert max(points) <= 62
        assert {1, 62} <= points

    def test_parents_unchanged_by_crossover(self, quiet_config):
        engine = RoyalRoadEngine(quiet_config)
        p1 = Individual(ALL_ONES, engine.schema)
        p2 = Individual(ALL_ZEROS, engine.schema)
        engine.crossover(p1, p2)
        assert p1.bit_string == ALL_ONES
        assert p2.bit_string == ALL_ZEROS

    def test_mutation_noop_at_rate_zero(self):
        engine = RoyalRoadEngine(small_config(mutation_rate=0.0))
        individual = Individual("01" * 32, engine.schema)
        assert engine.mutate(individual) is individual

    def test_mutation_rate_one_flips_everything(self):
        engine = RoyalRoadEngine(small_config(mutation_rate=1.0))
        individual = Individual(ALL_ZEROS, engine.schema)
        mutated = engine.mutate(individual)

        assert mutated.bit_string == ALL_ONES
        assert mutated.score == 80
        assert individual.bit_string == ALL_ZEROS

    def test_mutation_frequency(self, quiet_config):
        """Test that bits flip with roughly the configured probability."""
        engine = RoyalRoadEngine(quiet_config)
        individual = Individual(ALL_ZEROS, engine.schema)
        flipped = sum(engine.mutate(individual).bit_string.count("1") for _ in range(2000))
        rate = flipped / (2000 * 64)
        assert 0.003 < rate < 0.007

    def test_mate_without_crossover_copies(self):
        """Test that a failed crossover coin flip passes parents through."""
        engine = RoyalRoadEngine(small_config(crossover_rate=0.0))
        p1 = Individual(ALL_ONES, engine.schema)
        p2 = Individual(ALL_ZEROS, engine.schema)

        c1, c2 = engine.mate(p1, p2)
        assert c1.bit_string == ALL_ONES
        assert c2.bit_string == ALL_ZEROS


class TestGenerationAdvance:
    """Test suite for building successive generations."""

    def test_population_size_conserved(self, quiet_config):
        """Test that a generation holds 42 elites plus 86 offspring."""
        engine = RoyalRoadEngine(quiet_config)
        elites = engine.population.fittest(42)

        assert engine.next_generation() is False
        assert len(engine.population) == 128
        assert engine.generation == 1
        for elite in elites:
            assert any(ind is elite for ind in engine.population)

    def test_new_population_is_sorted(self, quiet_config):
        engine = RoyalRoadEngine(quiet_config)
        for _ in range(3):
            engine.next_generation()
        scores = [ind.score for ind in engine.population]
        assert scores == sorted(scores)
        assert engine.population.sum_score == sum(scores)


class TestTermination:
    """Test suite for early termination and run results."""

    def _scripted_engine(self):
        engine = RoyalRoadEngine(small_config())
        left = Individual("1" * 32 + "0" * 32, engine.schema)
        right = Individual("0" * 32 + "1" * 32, engine.schema)

        population = Population()
        for individual in (Individual(ALL_ZEROS, engine.schema),
                           Individual(ALL_ZEROS, engine.schema), left, right):
            population.add_individual(individual)
        population.setup()
        engine.population = population

        engine.rng = ScriptedRNG([
            # generation 0: two score-1 parents, no crossover
            ("integers", 0), ("integers", 0), ("random", 0.9),
            # generation 1: the two halves cross over at bit 32
            ("integers", 41), ("integers", 81), ("random", 0.1), ("integers", 32),
        ])
        return engine

    def test_optimum_found_at_scripted_generation(self):
        """Test exact discovery of the score-80 optimum in generation 1."""
        engine = self._scripted_engine()
        result = engine.find_optimal()

        assert engine.state == EngineState.TERMINATED
        assert engine.rng.script == []
        assert result.found is True
        assert result.generations_to_solve == 1
        assert result.best_individual.bit_string == ALL_ONES
        assert result.best_individual.score == result.optimal_score == 80
        # stats of generation 0 only: schema 8 carried by the right half
        assert result.pct_schema8_history == [25]
        assert result.pct_schema12_history == [0]
        assert result.pct_schema14_history == [0]

    def test_partial_population_discarded(self):
        engine = self._scripted_engine()
        engine.find_optimal()
        assert len(engine.population) == 4
        assert engine.generation == 1

    def test_not_found_reports_zero(self, ga_test_config):
        """Test the not-found convention after exhausting the cap."""
        engine = RoyalRoadEngine(ga_test_config)
        result = engine.find_optimal()

        assert engine.state == EngineState.TERMINATED
        assert result.found is False
        assert result.generations_to_solve == 0
        assert engine.generation == 20
        assert len(result.pct_schema8_history) == 20
        assert len(result.pct_schema12_history) == 20
        assert len(result.pct_schema14_history) == 20
        assert all(0 <= pct <= 100 for pct in result.pct_schema8_history)
        assert result.best_individual is engine.population.best

    def test_seeded_runs_are_reproducible(self):
        config = create_experiment_config("1A", random_seed=99)
        config.evolution.generations = 60

        first = RoyalRoadEngine(config).find_optimal()
        second = RoyalRoadEngine(config).find_optimal()

        assert first == second

    def test_full_experiment_1a(self):
        """Test that the seeded classic 1A run finds the optimum in generation 564."""
        config = create_experiment_config("1A", random_seed=2024)
        result = RoyalRoadEngine(config).find_optimal()

        assert result.found is True
        assert result.generations_to_solve == 564
        assert result.best_individual.score == 80
        assert result.best_individual.bit_string == ALL_ONES
        assert len(result.pct_schema8_history) == 564


class TestProgressLogging:
    """Test suite for per-generation progress logs."""

    def test_progress_reports_logged_generation(self, caplog):
        """Test that best and average scores belong to the generation logged."""
        config = RoyalRoadConfig(
            evolution=EvolutionParameters(population_size=32, elite_size=8, generations=1),
            logging=LoggingConfig(enable_logging=True, log_level="INFO", log_interval=1),
            random_seed=11
        )
        engine = RoyalRoadEngine(config)
        best = engine.population.best.score
        average = engine.population.average_score
        pct8, pct12, pct14 = engine.population.get_schema_stats()

        with caplog.at_level(logging.INFO, logger="royalroad.engine"):
            engine.find_optimal()

        expected = (
            f"Generation 0: Best: {best}, Avg: {average:.2f}, "
            f"s8: {pct8}%, s12: {pct12}%, s14: {pct14}%"
        )
        assert expected in caplog.messages
