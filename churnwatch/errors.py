"""Exception types raised by churnwatch components."""

from __future__ import annotations


class ChurnwatchError(Exception):
    """Base class for all churnwatch failures."""


class ConfigError(ChurnwatchError):
    """The watch configuration could not be loaded."""


class ScanError(ChurnwatchError):
    """A watched directory could not be read during the walk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class StateWriteError(ChurnwatchError):
    """The snapshot file could not be persisted."""
