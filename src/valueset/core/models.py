"""Core data types shared across valueset."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from valueset.value_set import ValueSet


class ListenerKind(str, Enum):
    """Events a ValueSet can notify listeners about."""

    CHANGE = "change"


class FieldError(BaseModel):
    """A validation failure attached to one field.

    Plain mappings with a ``"message"`` key are accepted everywhere a
    FieldError is; this model is a convenience for callers that want
    attribute access. Extra attributes are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    message: str | None = None


class _Unset:
    """Marker for an option that was not supplied."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

Originals = dict[str, Any]
Changes = dict[str, Any]
FieldErrorLike = Mapping[str, Any] | FieldError
AllFieldErrors = dict[str, Sequence[FieldErrorLike] | None]
ChangeListener = Callable[[str, Any, "ValueSet"], Any]
