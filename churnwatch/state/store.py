"""Snapshot persistence keyed by a hash of the configuration path."""

from __future__ import annotations

import fcntl
import hashlib
import logging
import os
import tempfile
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from churnwatch.errors import StateWriteError
from churnwatch.scanner.models import ScanResult
from churnwatch.state.models import NoPriorState, PriorState, Snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "nagios_check_dir_changes_state"

# Minimum age of the snapshot before it is rewritten
WRITE_INTERVAL_SECONDS = 900

# Undecodable filenames come back from os.walk as lone surrogates
SNAPSHOT_ERRORS = "surrogateescape"


def snapshot_name(config_path: str) -> str:
    """Derive the snapshot filename from the first 8 hex chars of MD5(config path)."""
    digest = hashlib.md5(config_path.encode("utf-8")).hexdigest()[:8]
    return f"{SNAPSHOT_PREFIX}_{digest}"


class StateStore:
    """Reads and throttled-writes the snapshot for one configuration file.

    The snapshot is plain text with one ``path|mtime`` token per line. It is
    rewritten at most once every WRITE_INTERVAL_SECONDS so frequent polling
    keeps comparing against the same baseline.
    """

    def __init__(self, state_dir: str | Path, config_path: str) -> None:
        self.state_dir = Path(state_dir)
        self.config_path = config_path
        self.snapshot_path = self.state_dir / snapshot_name(config_path)

    @property
    def lock_path(self) -> Path:
        return self.snapshot_path.with_name(self.snapshot_path.name + ".lock")

    def read(self) -> PriorState:
        """Load the prior snapshot, or NoPriorState if none has been written."""
        try:
            text = self.snapshot_path.read_text(encoding="utf-8", errors=SNAPSHOT_ERRORS)
        except FileNotFoundError:
            logger.debug("no snapshot at %s", self.snapshot_path)
            return NoPriorState()
        tokens = frozenset(line for line in text.split("\n") if line)
        logger.debug("loaded %d tokens from %s", len(tokens), self.snapshot_path)
        return Snapshot(tokens=tokens)

    def is_fresh(self, now: float | None = None) -> bool:
        """True if the snapshot exists and is younger than the write interval."""
        now = time.time() if now is None else now
        try:
            mtime = self.snapshot_path.stat().st_mtime
        except FileNotFoundError:
            return False
        return mtime > now - WRITE_INTERVAL_SECONDS

    def write(self, scan: ScanResult, now: float | None = None) -> bool:
        """Persist *scan* unless the current snapshot is still fresh.

        Returns True if the snapshot was written, False if the write was
        skipped. Raises StateWriteError if the file cannot be written.
        """
        if self.is_fresh(now):
            logger.debug("snapshot %s is fresh, not rewriting", self.snapshot_path)
            return False

        payload = "\n".join(scan.tokens)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.snapshot_path.name}.", dir=self.state_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8", errors=SNAPSHOT_ERRORS) as f:
                f.write(payload)
            os.replace(tmp_name, self.snapshot_path)
        except (OSError, UnicodeError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StateWriteError(
                f"Cannot write snapshot {self.snapshot_path}: {e}"
            ) from e

        logger.debug("wrote %d tokens to %s", len(scan), self.snapshot_path)
        return True

    @contextmanager
    def lock(self) -> Iterator[bool]:
        """Hold an exclusive advisory lock for this snapshot.

        Yields True when the lock is held. If the lock file cannot be opened
        the block still runs, unlocked, and yields False.
        """
        try:
            fd = os.open(self.lock_path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as e:
            logger.warning("cannot open lock file %s: %s", self.lock_path, e)
            yield False
            return

        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            yield True
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)
