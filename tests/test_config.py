"""Tests for churnwatch.config: models and YAML loader."""

import pytest
from pydantic import ValidationError

from churnwatch.config import (
    EXAMPLE_CONFIG_TEMPLATE,
    CheckOptions,
    Thresholds,
    WatchConfig,
    load_watch_config,
)
from churnwatch.config.loader import _expand_env_vars
from churnwatch.errors import ConfigError


# ── Models ──────────────────────────────────────────────────────────


class TestWatchConfig:
    def test_excludes_default_empty(self):
        cfg = WatchConfig(directories=["/data"])
        assert cfg.excludes == []

    def test_requires_at_least_one_directory(self):
        with pytest.raises(ValidationError):
            WatchConfig(directories=[])

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            WatchConfig(directories=["/data"], exclude=["/data/tmp"])

    def test_is_immutable(self):
        cfg = WatchConfig(directories=["/data"])
        with pytest.raises(ValidationError):
            cfg.directories = ["/other"]


class TestThresholds:
    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            Thresholds(critical=-1, warning=0)

    def test_inverted_pair_is_allowed(self):
        t = Thresholds(critical=1, warning=5)
        assert t.critical < t.warning


class TestCheckOptions:
    def test_defaults(self):
        opts = CheckOptions(config_path="/etc/watch.yaml", thresholds=Thresholds(critical=2, warning=1))
        assert str(opts.state_dir) == "/tmp"
        assert opts.log_file is None


# ── Loader ──────────────────────────────────────────────────────────


class TestLoadWatchConfig:
    def test_loads_lists_in_order(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text("directories:\n  - /b\n  - /a\nexcludes:\n  - /b/cache\n")
        cfg = load_watch_config(path)
        assert cfg.directories == ["/b", "/a"]
        assert cfg.excludes == ["/b/cache"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found or not readable"):
            load_watch_config(tmp_path / "nope.yaml")

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_watch_config(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text("directories: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_watch_config(path)

    def test_empty_document(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_watch_config(path)

    def test_missing_directories_key(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text("excludes: [/tmp]\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_watch_config(path)

    def test_yaml_is_not_executed(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text("!!python/object/apply:os.system ['true']\n")
        with pytest.raises(ConfigError):
            load_watch_config(path)

    def test_env_vars_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WATCH_ROOT", "/srv/www")
        path = tmp_path / "watch.yaml"
        path.write_text('directories: ["${WATCH_ROOT}/html"]\nexcludes: ["${WATCH_ROOT}/html/cache"]\n')
        cfg = load_watch_config(path)
        assert cfg.directories == ["/srv/www/html"]
        assert cfg.excludes == ["/srv/www/html/cache"]

    def test_home_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "watch.yaml"
        path.write_text("directories: ['~/uploads']\n")
        cfg = load_watch_config(path)
        assert cfg.directories == [str(tmp_path / "uploads")]

    def test_example_template_is_valid(self, tmp_path):
        path = tmp_path / "watch.yaml"
        path.write_text(EXAMPLE_CONFIG_TEMPLATE)
        cfg = load_watch_config(path)
        assert cfg.directories == ["/var/www"]
        assert "/var/www/cache" in cfg.excludes


class TestExpandEnvVars:
    def test_unset_var_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("CHURNWATCH_UNSET", raising=False)
        assert _expand_env_vars("${CHURNWATCH_UNSET}/x") == "/x"

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("A", "1")
        assert _expand_env_vars({"k": ["${A}", {"n": "${A}${A}"}], "i": 3}) == {
            "k": ["1", {"n": "11"}],
            "i": 3,
        }
