"""
Core functionality shared by the Royal Road package: application settings.
"""

from src.core.config import settings

__all__ = [
    "settings",
]
