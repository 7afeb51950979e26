"""
Error Types

Every failure in the puzzle core degrades to "try again later"; none of
these is fatal to the process.
"""


class PuzzleHubError(Exception):
    """Base class for all puzzle hub errors."""


class InputInvalid(PuzzleHubError, ValueError):
    """A guess, selection or path was rejected before it touched any state."""


class UpstreamUnavailable(PuzzleHubError):
    """A puzzle fetch or remote service call did not succeed."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class UpstreamMalformed(UpstreamUnavailable):
    """An upstream payload failed structural validation."""


class StorageCorrupt(PuzzleHubError):
    """A locally stored record failed validation. Never leaves the store."""
