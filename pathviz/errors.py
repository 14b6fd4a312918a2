"""
Error types raised by the search core.
"""


class PathvizError(Exception):
    """Base class for recoverable errors reported to the host."""


class InvalidDimension(PathvizError, ValueError):
    """Grid dimensions must both be at least one cell."""

    def __init__(self, cols: int, rows: int) -> None:
        super().__init__(f"invalid grid size {cols}x{rows}")
        self.cols = cols
        self.rows = rows


class MissingEndpoint(PathvizError):
    """A search was requested before both start and goal were placed."""


class NoOp(PathvizError):
    """The command had nothing to do in the current state."""


class SearchAlreadyRunning(NoOp):
    """start() was called while a search is still running."""


class InternalInvariantViolation(RuntimeError):
    """Parent chain of a finished search does not end at the start cell."""
