"""Reporter - formats the check result, appends it to the log and prints it."""

from __future__ import annotations

import fcntl
import logging
from datetime import datetime
from pathlib import Path

import typer

from churnwatch.evaluator.models import Evaluation, Severity

logger = logging.getLogger(__name__)

FIRST_RUN_TEMPLATE = (
    "CHANGES COULD NOT BE CHECKED - State file was not found - might be first run ({cfg})"
)

UNKNOWN_TEMPLATE = "UNKNOWN - {reason} ({cfg})"

_SEVERITY_TEMPLATES = {
    Severity.CRITICAL: "CRITICAL CHANGES - {delta} changed files/directories ({cfg}) | changes={delta}",
    Severity.WARNING: "WARNING CHANGES - {delta} changed files/directories ({cfg}) | changes={delta}",
    Severity.OK: "NO SIGNIFICANT CHANGES - {delta} changed files/directories ({cfg}) | changes={delta}",
}


def format_message(evaluation: Evaluation, config_path: str) -> str:
    """Render the single status line for *evaluation*."""
    if not evaluation.checked:
        return FIRST_RUN_TEMPLATE.format(cfg=config_path)
    if evaluation.severity is Severity.UNKNOWN:
        return UNKNOWN_TEMPLATE.format(reason="changes could not be evaluated", cfg=config_path)
    template = _SEVERITY_TEMPLATES[evaluation.severity]
    return template.format(delta=evaluation.delta, cfg=config_path)


class Reporter:
    """Writes check results to stdout and, optionally, an append-only log file.

    Each log append takes an exclusive lock on the file so concurrent runs
    sharing a log do not interleave lines.
    """

    def __init__(self, log_file: str | Path | None = None) -> None:
        self.log_file = Path(log_file) if log_file else None

    def log(self, message: str) -> bool:
        """Append *message* to the log file. Returns False if nothing was written."""
        if self.log_file is None:
            return False
        try:
            with open(
                self.log_file, "a", buffering=1, encoding="utf-8", errors="surrogateescape"
            ) as f:
                fcntl.flock(f, fcntl.LOCK_EX)
                try:
                    f.write(message + "\n")
                finally:
                    fcntl.flock(f, fcntl.LOCK_UN)
        except (OSError, UnicodeError) as e:
            logger.warning("cannot append to log file %s: %s", self.log_file, e)
            return False
        return True

    def log_diff(self, evaluation: Evaluation, when: datetime | None = None) -> bool:
        """Record the changed tokens of an evaluated run in the log file."""
        if not evaluation.checked:
            return False
        when = when or datetime.now()
        lines = [f"Files differences {when:%Y-%m-%d %H:%M:%S}:", *evaluation.diff]
        return self.log("\n".join(lines))

    def emit(self, evaluation: Evaluation, config_path: str) -> int:
        """Log and print the status line, returning the process exit code."""
        message = format_message(evaluation, config_path)
        self.log(message)
        typer.echo(message)
        return int(evaluation.severity)

    def emit_unknown(self, reason: str, config_path: str) -> int:
        """Log and print an UNKNOWN status line for a run that could not be evaluated."""
        message = UNKNOWN_TEMPLATE.format(reason=reason, cfg=config_path)
        self.log(message)
        typer.echo(message)
        return int(Severity.UNKNOWN)
