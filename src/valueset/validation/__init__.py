"""Shape validation for ValueSet inputs."""

from valueset.validation.shapes import (
    validate_all_errors,
    validate_error_list,
    validate_error_message,
    validate_field_error,
    validate_listener,
    validate_listener_kind,
    validate_mapping,
)

__all__ = [
    "validate_all_errors",
    "validate_error_list",
    "validate_error_message",
    "validate_field_error",
    "validate_listener",
    "validate_listener_kind",
    "validate_mapping",
]
