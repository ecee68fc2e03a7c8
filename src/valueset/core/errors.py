"""Custom exception hierarchy for valueset."""


class ValueSetError(Exception):
    """Base exception for all valueset errors."""


# --- Configuration ---
class ConfigError(ValueSetError):
    """Invalid or unreadable configuration."""


# --- Input shape ---
class InvalidShapeError(ValueSetError, TypeError):
    """A value handed to a ValueSet has the wrong shape.

    Subclasses ``TypeError`` so integration boundaries that already catch
    type errors keep working.
    """

    def __init__(self, subject: str, problem: str):
        self.subject = subject
        self.problem = problem
        super().__init__(f"{subject} {problem}")


class InvalidListenerError(InvalidShapeError):
    """Listener kind or callback rejected by ``ValueSet.listen``."""
