"""Exception hierarchy for entity-to-model."""

from .analysis import AnalysisError, ParsingError
from .base import EntityToModelError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError

__all__ = [
    "EntityToModelError",
    "AnalysisError",
    "ParsingError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
