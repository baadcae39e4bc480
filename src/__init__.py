"""
Royal Road Genetic Algorithm - Source Package

This package contains the application settings and the Royal Road
genetic algorithm engine.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__"
]
