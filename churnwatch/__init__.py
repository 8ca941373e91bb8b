"""churnwatch - monitoring probe that reports directory-tree churn between runs."""

from churnwatch.errors import ChurnwatchError, ConfigError, ScanError, StateWriteError

__version__ = "1.0.0"

__all__ = [
    "ChurnwatchError",
    "ConfigError",
    "ScanError",
    "StateWriteError",
]
