"""
Royal Road Genetic Algorithm - Command Line Entry Point

Runs the Royal Road experiment with either the experiment 1A schema or the
experiment 1B schema, and prints the number of generations needed to find an
optimal individual followed by the per-generation schema percentages.

usage: main.py {1A,1B} [O]
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError
import logfire

from src.core.config import settings
from src.royalroad import (
    ConfigurationError,
    RoyalRoadConfig,
    RoyalRoadEngine,
    write_report,
)


def configure_observability() -> None:
    """Configure Logfire from the application settings."""
    logfire.configure(console=False, **settings.get_logfire_settings())


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="royal-road",
        description="Run the Royal Road genetic algorithm experiment"
    )
    parser.add_argument(
        "experiment",
        choices=["1A", "1B"],
        help="1A: 8-segment schema, 1B: 14-segment schema"
    )
    parser.add_argument(
        "overlap",
        nargs="?",
        choices=["O"],
        help="Use the overlapping 10-segment schema (experiment 1A only)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--generations",
        type=int,
        default=None,
        help="Maximum number of generations (default 1500)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Engine log level"
    )
    return parser


def build_config(args: argparse.Namespace) -> RoyalRoadConfig:
    """Translate parsed arguments into a run configuration."""
    config_dict = {
        # The overlap flag is only honoured for experiment 1A
        "experiment": {
            "experiment": args.experiment,
            "overlap": args.experiment == "1A" and args.overlap == "O",
        },
        "logging": {"log_level": args.log_level},
        "random_seed": args.seed,
    }
    if args.generations is not None:
        config_dict["evolution"] = {"generations": args.generations}
    return RoyalRoadConfig(**config_dict)


def main(argv: Optional[List[str]] = None) -> int:
    """Run one experiment and print its report to stdout."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValidationError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    configure_observability()

    try:
        engine = RoyalRoadEngine(config)
    except ConfigurationError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    print(f"Optimal score = {engine.optimal_score}")
    result = engine.find_optimal()
    write_report(result, args.experiment)
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
