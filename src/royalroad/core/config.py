"""
Royal Road Configuration Module.

This module defines configuration classes for the Royal Road genetic algorithm
experiment, including evolution parameters, the experiment selector, and
logging settings.
"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field, ConfigDict, model_validator
import json
import os

from src.royalroad.core.schema import SchemaKind, select_schema_kind


class EvolutionParameters(BaseModel):
    """Parameters controlling the genetic algorithm evolution process."""

    model_config = ConfigDict(validate_assignment=True)

    # Population parameters
    population_size: int = Field(
        default=128,
        ge=2,
        le=100000,
        description="Number of individuals in the population"
    )
    generations: int = Field(
        default=1500,
        ge=1,
        description="Maximum number of generations to evolve"
    )

    # Genetic operators
    mutation_rate: float = Field(
        default=0.005,
        ge=0.0,
        le=1.0,
        description="Probability of flipping each bit of a child"
    )
    crossover_rate: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Probability of crossover between parents"
    )

    # Selection parameters
    elite_size: int = Field(
        default=42,
        ge=0,
        description="Number of fittest individuals copied into the next generation"
    )

    @model_validator(mode="after")
    def validate_elite_split(self) -> "EvolutionParameters":
        """Offspring fill the population in pairs, so the remainder must be even."""
        offspring = self.population_size - self.elite_size
        if offspring <= 0:
            raise ValueError(
                f"Elite size ({self.elite_size}) must be less than "
                f"population size ({self.population_size})"
            )
        if offspring % 2 != 0:
            raise ValueError(
                f"Population size minus elite size ({offspring}) must be even"
            )
        return self

    @property
    def mating_rounds(self) -> int:
        """Number of parent pairs mated per generation."""
        return (self.population_size - self.elite_size) // 2


class ExperimentConfig(BaseModel):
    """Selects which Royal Road schema table a run uses."""

    experiment: Literal["1A", "1B"] = Field(
        default="1A",
        description="1A: 8-segment schema, 1B: 14-segment schema"
    )
    overlap: bool = Field(
        default=False,
        description="Use the 10-segment overlapping schema (1A only)"
    )

    @model_validator(mode="after")
    def validate_overlap(self) -> "ExperimentConfig":
        if self.overlap and self.experiment == "1B":
            raise ValueError("The overlapping schema can only be combined with experiment 1A")
        return self

    @property
    def schema14(self) -> bool:
        return self.experiment == "1B"

    @property
    def schema_kind(self) -> SchemaKind:
        return select_schema_kind(schema14=self.schema14, overlap=self.overlap)


class LoggingConfig(BaseModel):
    """Configuration for logging and monitoring."""

    enable_logging: bool = Field(
        default=True,
        description="Enable evolution progress logging"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_interval: int = Field(
        default=100,
        ge=1,
        description="Generations between progress logs"
    )


class RoyalRoadConfig(BaseModel):
    """Main configuration class for a Royal Road run."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    # Sub-configurations
    evolution: EvolutionParameters = Field(
        default_factory=EvolutionParameters,
        description="Evolution parameters"
    )
    experiment: ExperimentConfig = Field(
        default_factory=ExperimentConfig,
        description="Experiment selection"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and monitoring configuration"
    )

    # General settings
    random_seed: Optional[int] = Field(
        default=None,
        ge=0,
        description="Random seed for reproducibility"
    )

    @property
    def schema_kind(self) -> SchemaKind:
        return self.experiment.schema_kind

    @classmethod
    def from_env(cls) -> "RoyalRoadConfig":
        """Create configuration from environment variables."""
        config_dict: Dict[str, Any] = {}

        # Evolution parameters from env
        if pop_size := os.getenv("ROYAL_ROAD_POPULATION_SIZE"):
            config_dict.setdefault("evolution", {})["population_size"] = int(pop_size)
        if generations := os.getenv("ROYAL_ROAD_GENERATIONS"):
            config_dict.setdefault("evolution", {})["generations"] = int(generations)
        if mutation_rate := os.getenv("ROYAL_ROAD_MUTATION_RATE"):
            config_dict.setdefault("evolution", {})["mutation_rate"] = float(mutation_rate)
        if crossover_rate := os.getenv("ROYAL_ROAD_CROSSOVER_RATE"):
            config_dict.setdefault("evolution", {})["crossover_rate"] = float(crossover_rate)
        if elite_size := os.getenv("ROYAL_ROAD_ELITE_SIZE"):
            config_dict.setdefault("evolution", {})["elite_size"] = int(elite_size)

        # Experiment selection from env
        if experiment := os.getenv("ROYAL_ROAD_EXPERIMENT"):
            config_dict.setdefault("experiment", {})["experiment"] = experiment
        if overlap := os.getenv("ROYAL_ROAD_OVERLAP"):
            config_dict.setdefault("experiment", {})["overlap"] = overlap.lower() in ("1", "true", "yes")

        # General settings
        if random_seed := os.getenv("ROYAL_ROAD_RANDOM_SEED"):
            config_dict["random_seed"] = int(random_seed)
        if log_level := os.getenv("ROYAL_ROAD_LOG_LEVEL"):
            config_dict.setdefault("logging", {})["log_level"] = log_level.upper()

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump(mode="json")

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> "RoyalRoadConfig":
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)

    def validate_consistency(self) -> None:
        """Re-check cross-field invariants after in-place edits of sub-configs."""
        EvolutionParameters.model_validate(self.evolution.model_dump())
        ExperimentConfig.model_validate(self.experiment.model_dump())


# Convenience functions
def create_default_config() -> RoyalRoadConfig:
    """Create the configuration of the classic experiment 1A."""
    return RoyalRoadConfig()


def create_experiment_config(
    experiment: str = "1A",
    overlap: bool = False,
    random_seed: Optional[int] = None
) -> RoyalRoadConfig:
    """Create a configuration for one of the published experiments."""
    return RoyalRoadConfig(
        experiment=ExperimentConfig(experiment=experiment, overlap=overlap),
        random_seed=random_seed
    )


def create_test_config() -> RoyalRoadConfig:
    """Create a configuration suitable for testing (smaller, faster)."""
    return RoyalRoadConfig(
        evolution=EvolutionParameters(
            population_size=32,
            generations=20,
            mutation_rate=0.005,
            crossover_rate=0.7,
            elite_size=8
        ),
        logging=LoggingConfig(
            enable_logging=False,
            log_interval=1
        ),
        random_seed=1234
    )
