"""Prior-run state as seen by the evaluator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NoPriorState:
    """No snapshot file exists yet, e.g. on the first run for a config."""


@dataclass(frozen=True)
class Snapshot:
    """Tokens persisted by the previous run. May legitimately be empty."""

    tokens: frozenset[str] = frozenset()

    def __len__(self) -> int:
        return len(self.tokens)


PriorState = NoPriorState | Snapshot
