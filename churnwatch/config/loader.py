"""YAML watch-config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from churnwatch.errors import ConfigError

from .models import WatchConfig


def load_watch_config(path: str | Path) -> WatchConfig:
    """Read and validate the watch configuration at *path*.

    The file is parsed as data, never executed. Any failure to read, parse
    or validate it raises ConfigError.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found or not readable - {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Configuration file not found or not readable - {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config in {path}: expected a mapping with 'directories'")

    raw = _expand_env_vars(raw)
    try:
        config = WatchConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    return config.model_copy(update={
        "directories": [os.path.expanduser(d) for d in config.directories],
        "excludes": [os.path.expanduser(e) for e in config.excludes],
    })


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Example watch configuration, printed by `check_dir_changes --example-config`
EXAMPLE_CONFIG_TEMPLATE = """\
# churnwatch watch configuration

# Directories walked recursively on every run
directories:
  - "/var/www"
  # - "${HOME}/uploads"

# Path prefixes skipped during the walk (plain prefix match, not globs)
excludes:
  - "/var/www/cache"
  - "/var/www/logs"
"""
