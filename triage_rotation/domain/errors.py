"""Error taxonomy for a rotation run."""

from __future__ import annotations

from collections.abc import Sequence


class TriageRotationError(Exception):
    """Base class for all errors raised by triage_rotation."""


class ConfigurationError(TriageRotationError):
    """Required configuration is missing or unusable. Fatal, raised pre-flight."""


class UnknownIdentityError(TriageRotationError):
    """One or more rotation contact keys do not match a directory entry."""

    def __init__(self, unmatched: Sequence[str]):
        self.unmatched = list(unmatched)
        super().__init__(
            f"Not directory users (by email): {', '.join(self.unmatched)}"
        )


class TrackerApiError(TriageRotationError):
    """An issue-tracker call was rejected or could not be completed."""


class PayloadValidationError(TrackerApiError):
    """The issue tracker returned a payload that does not match the expected shape."""
