"""Snapshot state of the previous run."""

from churnwatch.state.models import NoPriorState, PriorState, Snapshot
from churnwatch.state.store import (
    SNAPSHOT_PREFIX,
    WRITE_INTERVAL_SECONDS,
    StateStore,
    snapshot_name,
)

__all__ = [
    "NoPriorState",
    "PriorState",
    "SNAPSHOT_PREFIX",
    "Snapshot",
    "StateStore",
    "WRITE_INTERVAL_SECONDS",
    "snapshot_name",
]
