"""Recursive directory walker producing path|mtime tokens."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from churnwatch.config.models import WatchConfig
from churnwatch.errors import ScanError
from churnwatch.scanner.models import ScanResult, make_token

logger = logging.getLogger(__name__)


def _is_excluded(path: str, excludes: Iterable[str]) -> bool:
    """Plain string prefix match against every exclude, stopping at the first hit."""
    return any(path.startswith(prefix) for prefix in excludes)


def _raise_walk_error(err: OSError) -> None:
    raise ScanError(err.filename or "<unknown>", err.strerror or str(err)) from err


def _mtime(path: str) -> int | None:
    """Modification time in whole seconds, or None if the entry vanished mid-walk."""
    try:
        return int(os.lstat(path).st_mtime)
    except FileNotFoundError:
        logger.debug("entry disappeared during scan: %s", path)
        return None
    except OSError as e:
        raise ScanError(path, e.strerror or str(e)) from e


def _walk(root: str, excludes: list[str]) -> Iterator[str]:
    """Yield tokens for every entry beneath *root* that no exclude matches.

    Symlinked directories are recorded but not descended into. Excluded
    directories are pruned, since everything beneath them shares the prefix.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        kept_dirs = []
        for name in dirnames:
            path = os.path.join(dirpath, name)
            if _is_excluded(path, excludes):
                continue
            mtime = _mtime(path)
            if mtime is None:
                continue
            yield make_token(path, mtime)
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in filenames:
            path = os.path.join(dirpath, name)
            if _is_excluded(path, excludes):
                continue
            mtime = _mtime(path)
            if mtime is not None:
                yield make_token(path, mtime)


def scan(config: WatchConfig) -> ScanResult:
    """Walk every watched directory and collect its file records.

    Any unreadable directory aborts the whole scan with ScanError. Partial
    results are never returned.
    """
    excludes = list(config.excludes)
    tokens: list[str] = []

    for directory in config.directories:
        root = os.path.abspath(directory)
        if not os.path.isdir(root):
            raise ScanError(root, "not a directory")
        before = len(tokens)
        tokens.extend(_walk(root, excludes))
        logger.debug("scanned %s: %d entries", root, len(tokens) - before)

    return ScanResult(tokens=tuple(tokens))
