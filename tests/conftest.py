"""Shared fixtures for the valueset test suite."""

from __future__ import annotations

import pytest

from valueset import ValueSet


# ---------------------------------------------------------------------------
# ValueSets
# ---------------------------------------------------------------------------

@pytest.fixture
def value_set() -> ValueSet:
    """Return an empty ValueSet."""
    return ValueSet()


@pytest.fixture
def user_value_set() -> ValueSet:
    """Return a ValueSet seeded like a user record mid-edit."""
    return ValueSet(
        originals={"name": "Ada", "email": "ada@example.com", "age": 36},
        changes={"email": "ada@lovelace.dev"},
        errors={"email": [{"message": "Email already taken"}]},
    )


# ---------------------------------------------------------------------------
# Listeners
# ---------------------------------------------------------------------------

@pytest.fixture
def recorder():
    """Return a listener that records every call it receives."""

    class Recorder:
        def __init__(self) -> None:
            self.calls: list[tuple] = []

        def __call__(self, *args) -> None:
            self.calls.append(args)

    return Recorder()
