"""
Core utilities
Settings, logging and exceptions
"""

from .config import BaymaxxSettings, get_settings, reload_settings
from .exceptions import (
    BaymaxxException,
    ConfigurationError,
    DegradedSignalError,
    ExternalServiceError,
    GenerationError,
    InteractionProcessingError,
    PersistenceError,
)
from .logging import BaymaxxLogger, get_logger

__all__ = [
    "BaymaxxSettings",
    "get_settings",
    "reload_settings",
    "BaymaxxLogger",
    "get_logger",
    "BaymaxxException",
    "ConfigurationError",
    "DegradedSignalError",
    "ExternalServiceError",
    "InteractionProcessingError",
    "GenerationError",
    "PersistenceError",
]
