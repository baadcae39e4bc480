"""
Royal Road Genetic Algorithm Experiment.

Evolves 64-bit strings toward a Royal Road fitness optimum using
fitness-proportional selection, single-point crossover, bit-flip mutation
and elitism, and tracks how often the schema sub-goals are present in each
generation.
"""

from src.royalroad.core import (
    RoyalRoadConfig,
    EvolutionParameters,
    ExperimentConfig,
    LoggingConfig,
    create_default_config,
    create_experiment_config,
    create_test_config,
    RoyalRoadError,
    ConfigurationError,
    SchemaIndexError,
    PopulationError,
    SchemaKind,
    SchemaSegment,
    SchemaTable,
    select_schema_kind,
    Individual,
    Population,
    RoyalRoadEngine,
    EngineState,
    EvolutionResult
)
from src.royalroad.reporting import format_history, format_report, write_report

__version__ = "1.0.0"

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
    # Population
    "Individual",
    "Population",
    # Engine
    "RoyalRoadEngine",
    "EngineState",
    "EvolutionResult",
    # Reporting
    "format_history",
    "format_report",
    "write_report"
]
