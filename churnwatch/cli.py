"""CLI entry point for the directory-change check."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from churnwatch import __version__
from churnwatch.config import (
    EXAMPLE_CONFIG_TEMPLATE,
    CheckOptions,
    Thresholds,
    load_watch_config,
)
from churnwatch.config.models import DEFAULT_STATE_DIR
from churnwatch.errors import ConfigError, ScanError, StateWriteError
from churnwatch.evaluator import Severity, evaluate
from churnwatch.output import Reporter
from churnwatch.scanner import scan
from churnwatch.state import StateStore

logger = logging.getLogger(__name__)

PROG_NAME = "check_dir_changes"

# Exit statuses outside the severity mapping
USAGE_ERROR_EXIT = 1
CONFIG_ERROR_EXIT = 2

USAGE = f"""\
{PROG_NAME} v{__version__}

{PROG_NAME} -i <cfgfile> [-y <tmpdir>] [-l <logfile>] -c <critspec> -w <warnspec>
  -i <cfgfile>   Path to configuration file containing directories to check
  -c <critspec>  Critical Change Threshold
  -w <warnspec>  Warning Change Threshold
  -y <tmpdir>    Directory to use for state files (default: {DEFAULT_STATE_DIR})
  -l <logfile>   Path to log file
  -v, --verbose  Debug diagnostics on stderr"""

# Newer typer releases bundle their own copy of click; parse errors are raised
# from whichever click module typer itself imports.
_click_exceptions = sys.modules[typer.BadParameter.__module__]

app = typer.Typer(
    name=PROG_NAME,
    help="Report directory-tree churn since the previous run as a monitoring check.",
    add_completion=False,
)


def _usage(msg: str | None = None) -> NoReturn:
    """Print usage (and an optional reason) to stdout and exit 1."""
    typer.echo(USAGE)
    if msg:
        typer.echo(f"\n*!* {msg}")
    raise typer.Exit(USAGE_ERROR_EXIT)


def _configure_logging(verbose: bool) -> None:
    pkg_logger = logging.getLogger("churnwatch")
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _parse_threshold(flag: str, value: str | None) -> int:
    if value is None:
        _usage(f"Must specify {flag}")
    try:
        parsed = int(value)
    except ValueError:
        _usage(f"Invalid argument to {flag}")
    if parsed < 0:
        _usage(f"Invalid argument to {flag}")
    return parsed


def _parse_state_dir(value: str | None) -> Path:
    if value is None:
        return DEFAULT_STATE_DIR
    path = Path(value)
    if not path.is_dir() or not _is_writable(path):
        _usage(f"{value} is not a writable directory")
    return path


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK | os.X_OK)


def _build_options(
    cfgfile: str | None,
    critical: str | None,
    warning: str | None,
    tmpdir: str | None,
    logfile: str | None,
) -> CheckOptions:
    """Validate raw flag values into an immutable CheckOptions."""
    crit = _parse_threshold("-c", critical)
    warn = _parse_threshold("-w", warning)
    if not cfgfile:
        _usage("Must specify -i")
    state_dir = _parse_state_dir(tmpdir)
    try:
        return CheckOptions(
            config_path=cfgfile,
            thresholds=Thresholds(critical=crit, warning=warn),
            state_dir=state_dir,
            log_file=Path(logfile) if logfile else None,
        )
    except ValidationError as e:
        _usage(str(e))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} v{__version__}")
        raise typer.Exit()


def _example_config_callback(value: bool) -> None:
    if value:
        typer.echo(EXAMPLE_CONFIG_TEMPLATE, nl=False)
        raise typer.Exit()


def run_check(options: CheckOptions) -> int:
    """Load, scan, persist, evaluate and report. Returns the process exit code."""
    reporter = Reporter(options.log_file)

    try:
        watch = load_watch_config(options.config_path)
    except ConfigError as e:
        typer.echo(str(e))
        return CONFIG_ERROR_EXIT

    store = StateStore(options.state_dir, options.config_path)
    try:
        with store.lock():
            prior = store.read()
            current = scan(watch)
            try:
                store.write(current)
            except StateWriteError as e:
                # The check result does not depend on persisting the new baseline
                logger.warning("%s; keeping previous snapshot", e)
    except ScanError as e:
        return reporter.emit_unknown(str(e), options.config_path)

    evaluation = evaluate(current, prior, options.thresholds)
    reporter.log_diff(evaluation)
    return reporter.emit(evaluation, options.config_path)


@app.command()
def check(
    cfgfile: Annotated[
        str | None, typer.Option("-i", help="Path to configuration file containing directories to check")
    ] = None,
    critical: Annotated[str | None, typer.Option("-c", help="Critical change threshold")] = None,
    warning: Annotated[str | None, typer.Option("-w", help="Warning change threshold")] = None,
    tmpdir: Annotated[
        str | None, typer.Option("-y", help="Directory to use for state files [default: /tmp]")
    ] = None,
    logfile: Annotated[str | None, typer.Option("-l", help="Path to log file")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug diagnostics on stderr")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
    example_config: Annotated[
        bool,
        typer.Option(
            "--example-config",
            callback=_example_config_callback,
            is_eager=True,
            help="Print an example watch configuration and exit",
        ),
    ] = False,
) -> None:
    """Compare watched directories against the previous run and report churn."""
    _configure_logging(verbose)
    options = _build_options(cfgfile, critical, warning, tmpdir, logfile)
    raise typer.Exit(run_check(options))


def main(argv: list[str] | None = None) -> NoReturn:
    """Console-script entry point.

    Typer reports its own parse errors (unknown option, missing value) with
    exit status 2. They are re-reported here as usage errors with exit
    status 1.
    """
    try:
        code = app(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except _click_exceptions.UsageError as e:
        typer.echo(USAGE)
        typer.echo(f"\n*!* {e.format_message()}")
        sys.exit(USAGE_ERROR_EXIT)
    except typer.Abort:
        sys.exit(int(Severity.UNKNOWN))
    sys.exit(code or 0)


if __name__ == "__main__":
    main()
