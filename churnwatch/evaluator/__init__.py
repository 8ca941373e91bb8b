from churnwatch.evaluator.evaluator import classify, evaluate, forward_diff
from churnwatch.evaluator.models import Evaluation, Severity

__all__ = [
    "Evaluation",
    "Severity",
    "classify",
    "evaluate",
    "forward_diff",
]
