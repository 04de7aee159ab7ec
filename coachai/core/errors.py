"""
Engine errors - raised to the immediate caller, never swallowed.
"""


class CoachError(Exception):
    """Base exception for profile engine errors."""

    pass


class ValidationError(CoachError):
    """Malformed or out-of-range input, rejected before any state change."""

    def __init__(self, field: str, reason: str):
        """
        Initialize with the first failing field.

        Args:
            field: Dotted path of the failing field (e.g. "exercise_detection.0.confidence")
            reason: Human-readable reason
        """
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class StorageError(CoachError):
    """Persistence read/write failure."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage failure on '{key}': {reason}")


class NotFoundError(CoachError):
    """Requested record does not exist (e.g. uninitialized profile)."""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"Not found: {what}")


class InferenceError(CoachError):
    """The external analysis service failed or returned an unusable body."""

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Analysis service error: {reason}")
