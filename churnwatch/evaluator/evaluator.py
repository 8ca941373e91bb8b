"""Maps the forward difference between two scans to a severity."""

from __future__ import annotations

import logging

from churnwatch.config.models import Thresholds
from churnwatch.evaluator.models import Evaluation, Severity
from churnwatch.scanner.models import ScanResult
from churnwatch.state.models import NoPriorState, PriorState

logger = logging.getLogger(__name__)


def forward_diff(current: ScanResult, snapshot: frozenset[str]) -> tuple[str, ...]:
    """Tokens in *current* that the snapshot does not contain, in walk order.

    Entries that only exist in the snapshot (removed since the last run) are
    not part of the result.
    """
    return tuple(token for token in current if token not in snapshot)


def classify(delta: int, thresholds: Thresholds) -> Severity:
    """Critical is tested first, then warning, then OK."""
    if delta >= thresholds.critical:
        return Severity.CRITICAL
    if delta >= thresholds.warning:
        return Severity.WARNING
    return Severity.OK


def evaluate(current: ScanResult, prior: PriorState, thresholds: Thresholds) -> Evaluation:
    """Compare *current* against *prior* and decide a severity.

    Without a prior snapshot nothing can be compared: the outcome is OK with
    ``checked=False`` so callers can tell it apart from a zero-change run.
    """
    if isinstance(prior, NoPriorState):
        return Evaluation(severity=Severity.OK, checked=False)

    if thresholds.critical < thresholds.warning:
        logger.debug(
            "critical threshold %d is below warning threshold %d",
            thresholds.critical,
            thresholds.warning,
        )

    diff = forward_diff(current, prior.tokens)
    delta = len(diff)
    return Evaluation(severity=classify(delta, thresholds), delta=delta, diff=diff)
