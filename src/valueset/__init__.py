"""valueset - track original values, proposed changes and validation errors.

Public API
----------
Record:
    ValueSet, UNSET

Models:
    FieldError, ListenerKind

Errors:
    ValueSetError, InvalidShapeError, InvalidListenerError, ConfigError

Config / logging:
    Settings, load_settings, setup_logging, get_logger
"""

from valueset.core.config import Settings, load_settings
from valueset.core.errors import (
    ConfigError,
    InvalidListenerError,
    InvalidShapeError,
    ValueSetError,
)
from valueset.core.models import UNSET, FieldError, ListenerKind
from valueset.observability.logger import get_logger, setup_logging
from valueset.value_set import ValueSet

__all__ = [
    "ConfigError",
    "FieldError",
    "InvalidListenerError",
    "InvalidShapeError",
    "ListenerKind",
    "Settings",
    "UNSET",
    "ValueSet",
    "ValueSetError",
    "get_logger",
    "load_settings",
    "setup_logging",
]
