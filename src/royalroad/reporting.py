"""
Text reporting for Royal Road runs.

Formats the per-generation schema percentages of a run as comma-delimited
lines, one line per tracked schema.
"""

import sys
from typing import Iterable, List, Optional, TextIO

from src.royalroad.core.engine import EvolutionResult


def format_history(label: str, values: Iterable[int]) -> str:
    """Format one history line, e.g. ``s8%, 3,5,9,``."""
    return f"{label}, " + "".join(f"{value}," for value in values)


def format_report(result: EvolutionResult, experiment: str) -> List[str]:
    """
    Build the report lines for a finished run.

    The first line is the number of generations needed to find an optimum
    (0 when none was found). Experiment 1A reports the schema 8 history only;
    1B adds the schema 12 and schema 14 histories.
    """
    lines = [
        str(result.generations_to_solve),
        format_history("s8%", result.pct_schema8_history),
    ]

    if experiment == "1B":
        lines.append(format_history("s12%", result.pct_schema12_history))
        lines.append(format_history("s14%", result.pct_schema14_history))

    lines.append("")
    return lines


def write_report(
    result: EvolutionResult,
    experiment: str,
    stream: Optional[TextIO] = None
) -> None:
    """Write the report for `result` to `stream` (stdout by default)."""
    stream = stream or sys.stdout
    for line in format_report(result, experiment):
        stream.write(line + "\n")
