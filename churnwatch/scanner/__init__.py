"""Filesystem scanning: walk watched directories into path|mtime tokens."""

from churnwatch.scanner.models import ScanResult, make_token, split_token
from churnwatch.scanner.walker import scan

__all__ = [
    "ScanResult",
    "make_token",
    "scan",
    "split_token",
]
