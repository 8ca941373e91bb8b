"""Data models for change evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """Check outcome. The value doubles as the monitoring-plugin exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class Evaluation:
    """Result of comparing the current scan against the prior snapshot."""

    severity: Severity
    delta: int = 0
    diff: tuple[str, ...] = ()
    checked: bool = True
