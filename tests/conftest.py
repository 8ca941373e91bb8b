"""Shared test fixtures for churnwatch."""

import os

import pytest
import yaml

from churnwatch.config.models import CheckOptions, Thresholds, WatchConfig

BASE_MTIME = 1_600_000_000


@pytest.fixture
def base_mtime():
    """Modification time stamped on every entry of the data_dir tree."""
    return BASE_MTIME


@pytest.fixture
def data_dir(tmp_path):
    """A watched tree: a.txt at the top, b.txt under an excluded tmp/ dir, c.txt under sub/."""
    root = tmp_path / "data"
    (root / "tmp").mkdir(parents=True)
    (root / "sub").mkdir()
    (root / "a.txt").write_text("alpha")
    (root / "tmp" / "b.txt").write_text("bravo")
    (root / "sub" / "c.txt").write_text("charlie")
    for p in (root / "a.txt", root / "tmp" / "b.txt", root / "sub" / "c.txt", root / "sub", root / "tmp"):
        os.utime(p, (BASE_MTIME, BASE_MTIME))
    return root


@pytest.fixture
def watch_config(data_dir):
    return WatchConfig(directories=[str(data_dir)], excludes=[str(data_dir / "tmp")])


@pytest.fixture
def state_dir(tmp_path):
    d = tmp_path / "state"
    d.mkdir()
    return d


@pytest.fixture
def config_file(tmp_path, data_dir):
    """YAML watch config on disk matching the watch_config fixture."""
    path = tmp_path / "watch.yaml"
    path.write_text(yaml.safe_dump({
        "directories": [str(data_dir)],
        "excludes": [str(data_dir / "tmp")],
    }))
    return path


@pytest.fixture
def check_options(config_file, state_dir):
    return CheckOptions(
        config_path=str(config_file),
        thresholds=Thresholds(critical=10, warning=5),
        state_dir=state_dir,
    )
