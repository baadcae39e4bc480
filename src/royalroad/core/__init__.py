"""
Royal Road Core Module - Genetic Algorithm Components.

This module contains the core components of the Royal Road experiment,
including configuration, schema tables, individuals, population management,
and the evolution engine.
"""

from src.royalroad.core.config import (
    RoyalRoadConfig,
    EvolutionParameters,
    ExperimentConfig,
    LoggingConfig,
    create_default_config,
    create_experiment_config,
    create_test_config
)

from src.royalroad.core.exceptions import (
    RoyalRoadError,
    ConfigurationError,
    SchemaIndexError,
    PopulationError
)

from src.royalroad.core.schema import (
    SchemaKind,
    SchemaSegment,
    SchemaTable,
    select_schema_kind
)

from src.royalroad.core.individual import Individual

from src.royalroad.core.population import Population

from src.royalroad.core.engine import (
    RoyalRoadEngine,
    EngineState,
    EvolutionResult
)

__all__ = [
    # Configuration
    "RoyalRoadConfig",
    "EvolutionParameters",
    "ExperimentConfig",
    "LoggingConfig",
    "create_default_config",
    "create_experiment_config",
    "create_test_config",

    # Errors
    "RoyalRoadError",
    "ConfigurationError",
    "SchemaIndexError",
    "PopulationError",

    # Fitness model
    "SchemaKind",
    "SchemaSegment",
    "SchemaTable",
    "select_schema_kind",

    # Population management
    "Individual",
    "Population",

    # Engine
    "RoyalRoadEngine",
    "EngineState",
    "EvolutionResult"
]
