"""
PyTest configuration and fixtures for the Royal Road experiment.

This module provides shared fixtures for configurations, schema tables,
random generators and hand-built populations.
"""

import os
import sys

import numpy as np
import pytest
import logfire

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.royalroad.core.config import (
    RoyalRoadConfig,
    LoggingConfig,
    create_test_config,
)
from src.royalroad.core.individual import Individual
from src.royalroad.core.population import Population
from src.royalroad.core.schema import SchemaKind, SchemaTable


# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(20240601)


@pytest.fixture
def schema8():
    return SchemaTable.create(SchemaKind.ROYAL_ROAD_8)


@pytest.fixture
def schema14():
    return SchemaTable.create(SchemaKind.ROYAL_ROAD_14)


@pytest.fixture
def overlap_schema():
    return SchemaTable.create(SchemaKind.OVERLAP_10)


@pytest.fixture
def ga_test_config():
    """Small, seeded configuration for fast engine tests."""
    return create_test_config()


@pytest.fixture
def quiet_config():
    """Full-size experiment 1A configuration with logging disabled."""
    return RoyalRoadConfig(
        logging=LoggingConfig(enable_logging=False, log_level="WARNING"),
        random_seed=7
    )


@pytest.fixture
def make_individual(schema8):
    """Build an individual whose first `blocks` 8-bit blocks are all ones."""
    def _make(blocks: int, schema: SchemaTable = None) -> Individual:
        bits = "1" * (8 * blocks) + "01" * (32 - 4 * blocks)
        return Individual(bits, schema or schema8)
    return _make


@pytest.fixture
def ranked_population(make_individual):
    """Population with scores 1, 10, 20, ..., 70 added in shuffled order."""
    population = Population()
    for blocks in (3, 0, 7, 1, 5, 2, 6, 4):
        population.add_individual(make_individual(blocks))
    population.setup()
    return population
