"""Change-tracking record for a single edited entity.

A :class:`ValueSet` keeps three independent stores:

- **originals** - the last known good value of each field
- **changes** - proposed overrides, keyed by field
- **errors** - per-field lists of FieldErrors

plus a form-level ``error_message`` and a registry of change listeners.
A field counts as changed (or as having an original) when its key is
present, regardless of the stored value, so ``None`` is a legitimate
change.

Listeners are called synchronously in registration order. Each call is
isolated: an exception is logged and the next listener still runs. A
listener may write back into the same ValueSet; there is no cycle
detection, so a listener that calls ``set_change`` unconditionally will
recurse.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from valueset.core.errors import InvalidShapeError
from valueset.core.models import (
    UNSET,
    AllFieldErrors,
    ChangeListener,
    Changes,
    FieldErrorLike,
    ListenerKind,
    Originals,
)
from valueset.validation.shapes import (
    validate_all_errors,
    validate_error_list,
    validate_error_message,
    validate_field_error,
    validate_listener,
    validate_listener_kind,
    validate_mapping,
)

logger = logging.getLogger(__name__)

_OPTION_ALIASES = {
    "originals": "originals",
    "changes": "changes",
    "errors": "errors",
    "error_message": "error_message",
    "errorMessage": "error_message",
    "on_change": "on_change",
    "onChange": "on_change",
}


class ValueSet:
    """Originals, proposed changes and validation errors for one record."""

    def __init__(
        self,
        *,
        originals: Originals = UNSET,
        changes: Changes = UNSET,
        errors: AllFieldErrors = UNSET,
        error_message: str | None = UNSET,
        on_change: ChangeListener = UNSET,
    ) -> None:
        # Validate everything before storing anything.
        if originals is not UNSET:
            validate_mapping(originals, "originals")
        if changes is not UNSET:
            validate_mapping(changes, "changes")
        if errors is not UNSET:
            validate_all_errors(errors, "errors")
        if error_message is not UNSET:
            validate_error_message(error_message, "error_message")
        if on_change is not UNSET:
            validate_listener(on_change, "on_change")

        self._originals: Originals = {} if originals is UNSET else originals
        self._changes: Changes = {} if changes is UNSET else changes
        self._errors: AllFieldErrors = {} if errors is UNSET else errors
        self._error_message: str | None = (
            None if error_message is UNSET else error_message
        )
        self._listeners: dict[ListenerKind, list[ChangeListener]] = {
            kind: [] for kind in ListenerKind
        }
        if on_change is not UNSET:
            self._listeners[ListenerKind.CHANGE].append(on_change)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> ValueSet:
        """Build a ValueSet from a configuration mapping.

        Recognised keys are ``originals``, ``changes``, ``errors``,
        ``error_message`` (or ``errorMessage``) and ``on_change`` (or
        ``onChange``). Every key is optional.
        """
        if options is None:
            return cls()
        validate_mapping(options, "options", mutable=False)

        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise InvalidShapeError("options", f"has unknown option {key!r}")
            if name in kwargs:
                raise InvalidShapeError("options", f"sets {name!r} more than once")
            kwargs[name] = value
        return cls(**kwargs)

    def __repr__(self) -> str:
        return (
            f"ValueSet(originals={self._originals!r}, changes={self._changes!r}, "
            f"errors={self._errors!r}, error_message={self._error_message!r})"
        )

    # ------------------------------------------------------------------
    # Merged values
    # ------------------------------------------------------------------

    def get_value(self, field: str) -> Any:
        """Return the change for *field* if there is one, else the original."""
        if field in self._changes:
            return self._changes[field]
        return self._originals.get(field)

    def get_values(self) -> dict[str, Any]:
        return {**self._originals, **self._changes}

    # ------------------------------------------------------------------
    # Originals
    # ------------------------------------------------------------------

    def get_originals(self) -> Originals:
        return dict(self._originals)

    def get_original(self, field: str) -> Any:
        return self._originals.get(field)

    def set_original(self, field: str, value: Any) -> None:
        self._originals[field] = value

    def set_originals(self, originals: Originals) -> None:
        validate_mapping(originals, "originals")
        self._originals = originals
        logger.debug("originals replaced: fields=%d", len(originals))

    def has_original(self, field: str) -> bool:
        return field in self._originals

    # ------------------------------------------------------------------
    # Changes
    # ------------------------------------------------------------------

    def get_changes(self) -> Changes:
        return dict(self._changes)

    def get_change(self, field: str) -> Any:
        return self._changes.get(field)

    def set_change(self, field: str, value: Any) -> None:
        """Record a proposed value and notify change listeners."""
        self._changes[field] = value
        self._notify(ListenerKind.CHANGE, field, value)

    def set_changes(self, changes: Changes) -> None:
        """Replace every change, then notify once per field in *changes*."""
        validate_mapping(changes, "changes")
        self._changes = changes
        logger.debug("changes replaced: fields=%d", len(changes))
        for field, value in list(changes.items()):
            self._notify(ListenerKind.CHANGE, field, value)

    def clear_changes(self) -> None:
        self._changes = {}
        logger.debug("changes cleared")

    def has_change(self, field: str) -> bool:
        return field in self._changes

    # ------------------------------------------------------------------
    # Field errors
    # ------------------------------------------------------------------

    def get_all_errors(self) -> AllFieldErrors:
        return dict(self._errors)

    def get_errors(self, field: str) -> Sequence[FieldErrorLike]:
        """Return the errors recorded for *field*, as stored; ``[]`` when there are none."""
        errors = self._errors.get(field)
        if errors is None:
            return []
        return errors

    def set_errors(self, field: str, errors: Sequence[FieldErrorLike]) -> None:
        validate_error_list(errors, f"errors[{field!r}]")
        self._errors[field] = errors

    def add_error(self, field: str, error: FieldErrorLike) -> None:
        """Append one error to *field*, starting a new list if needed."""
        validate_field_error(error, f"errors[{field!r}]")
        current = self._errors.get(field)
        if isinstance(current, tuple):
            current = list(current)
        elif not isinstance(current, list):
            current = []
        current.append(error)
        self._errors[field] = current

    def set_all_errors(self, errors: AllFieldErrors) -> None:
        validate_all_errors(errors, "errors")
        self._errors = errors
        logger.debug("errors replaced: fields=%d", len(errors))

    def has_errors(self, field: str) -> bool:
        errors = self._errors.get(field)
        return isinstance(errors, (list, tuple)) and len(errors) > 0

    def has_any_errors(self) -> bool:
        """True when there is an error message or any field has errors."""
        if self.has_error_message():
            return True
        return any(self.has_errors(field) for field in self._errors)

    # Name used by earlier releases.
    has_error = has_any_errors

    def clear_errors(self, field: str) -> None:
        self._errors.pop(field, None)

    def clear_all_errors(self) -> None:
        """Drop every field error and the error message."""
        self._errors = {}
        self._error_message = None
        logger.debug("all errors cleared")

    # ------------------------------------------------------------------
    # Error message
    # ------------------------------------------------------------------

    def get_error_message(self) -> str | None:
        return self._error_message

    def set_error_message(self, message: str | None) -> None:
        validate_error_message(message, "error_message")
        self._error_message = message

    def has_error_message(self) -> bool:
        # An empty string counts as no message.
        return bool(self._error_message)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def listen(self, kind: ListenerKind | str, callback: ChangeListener) -> None:
        """Register *callback* for *kind* events. Listeners cannot be removed."""
        resolved = validate_listener_kind(kind)
        validate_listener(callback)
        self._listeners[resolved].append(callback)

    def _notify(self, kind: ListenerKind, field: str, value: Any) -> None:
        for callback in list(self._listeners[kind]):
            try:
                callback(field, value, self)
            except Exception:
                logger.exception(
                    "Listener error on kind=%s field=%s listener=%r",
                    kind.value,
                    field,
                    callback,
                )


__all__ = ["ValueSet"]
