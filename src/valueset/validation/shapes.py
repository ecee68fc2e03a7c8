"""Runtime shape checks for values handed to a ValueSet.

Every check raises :class:`~valueset.core.errors.InvalidShapeError` with a
message of the form ``"<subject> <problem>"``. The ``problem`` half is
stable and is what callers match on:

- ``can't be null`` / ``can't be an array`` / ``must be an object``
- ``must be an array``
- ``must have a message property`` / ``message must be a string``
- ``must be a string or null``
- ``must be a function`` / ``must be one of: change``

Checks run in the order listed in each function, so a value that is wrong
in several ways always reports the same problem.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from valueset.core.errors import InvalidListenerError, InvalidShapeError
from valueset.core.models import ListenerKind

_ARRAY_TYPES = (list, tuple)
_PRIMITIVE_TYPES = (str, bytes, int, float, complex, bool)


def validate_mapping(
    value: Any, subject: str, *, mutable: bool = True
) -> Mapping[str, Any]:
    """Check that *value* is a key/value mapping (``originals``, ``changes``).

    Stores are written in place, so read-only mappings such as
    ``MappingProxyType`` are rejected unless ``mutable=False``.
    """
    if value is None:
        raise InvalidShapeError(subject, "can't be null")
    if isinstance(value, _ARRAY_TYPES):
        raise InvalidShapeError(subject, "can't be an array")
    required = MutableMapping if mutable else Mapping
    if not isinstance(value, required):
        raise InvalidShapeError(subject, "must be an object")
    return value


def validate_field_error(value: Any, subject: str) -> Any:
    """Check a single FieldError: a mapping or object carrying ``message``."""
    if isinstance(value, _ARRAY_TYPES):
        raise InvalidShapeError(subject, "can't be an array")
    if value is None or isinstance(value, _PRIMITIVE_TYPES):
        raise InvalidShapeError(subject, "must be an object")

    if isinstance(value, Mapping):
        if "message" not in value:
            raise InvalidShapeError(subject, "must have a message property")
        message = value["message"]
    else:
        if not hasattr(value, "message"):
            raise InvalidShapeError(subject, "must have a message property")
        message = value.message

    if message is not None and not isinstance(message, str):
        raise InvalidShapeError(subject, "message must be a string")
    return value


def validate_error_list(value: Any, subject: str) -> Any:
    """Check a field's error list (a list or tuple of FieldErrors)."""
    if not isinstance(value, _ARRAY_TYPES):
        raise InvalidShapeError(subject, "must be an array")
    for index, error in enumerate(value):
        validate_field_error(error, f"{subject}[{index}]")
    return value


def validate_all_errors(value: Any, subject: str = "errors") -> Mapping[str, Any]:
    """Check the whole ``errors`` store: field -> error list or ``None``."""
    validate_mapping(value, subject)
    for field, errors in value.items():
        if errors is None:
            continue
        validate_error_list(errors, f"{subject}[{field!r}]")
    return value


def validate_error_message(value: Any, subject: str = "error_message") -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidShapeError(subject, "must be a string or null")
    return value


def validate_listener(value: Any, subject: str = "listener") -> Any:
    if not callable(value):
        raise InvalidListenerError(subject, "must be a function")
    return value


def validate_listener_kind(value: Any, subject: str = "listener kind") -> ListenerKind:
    """Resolve *value* to a :class:`ListenerKind`, rejecting anything else."""
    if isinstance(value, ListenerKind):
        return value
    if isinstance(value, str):
        try:
            return ListenerKind(value)
        except ValueError:
            pass
    allowed = ", ".join(kind.value for kind in ListenerKind)
    raise InvalidListenerError(subject, f"must be one of: {allowed}")
