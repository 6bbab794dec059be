"""Exception types raised by the simulator.

All of them derive from `SimulatorError` so the entry point can catch a
single type and abort the run without printing a partial report.
"""


class SimulatorError(Exception):
    """Base class for every fatal simulator condition."""


class ConfigurationError(SimulatorError, ValueError):
    """Invalid or inconsistent cache parameters (raised before any cache is built)."""


class TraceFormatError(SimulatorError, ValueError):
    """A trace record could not be parsed."""

    def __init__(self, message: str, line_no: int = 0, line: str = ''):
        self.line_no = line_no
        self.line = line
        if line_no:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class ReplacementInvariantViolation(SimulatorError, RuntimeError):
    """Raised when a block is installed into a set with no invalid slot.

    The hierarchy controller always evicts before installing, so seeing this
    means a caller skipped the `set_is_full` check.
    """


class LevelNotPresent(SimulatorError, LookupError):
    """An access was issued to a cache level configured with capacity 0."""


__all__ = [
    "SimulatorError",
    "ConfigurationError",
    "TraceFormatError",
    "ReplacementInvariantViolation",
    "LevelNotPresent",
]
