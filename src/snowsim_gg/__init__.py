"""Gravner-Griffeath hexagonal snow crystal growth."""

from .core.errors import InvalidConfiguration, NegativeMassUnderflow
from .core.settings import Settings
from .engine.growth_engine import GrowthEngine

__version__ = "0.1.0"

__all__ = ["GrowthEngine", "Settings", "InvalidConfiguration", "NegativeMassUnderflow"]
