from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_STATE_DIR = Path("/tmp")


class WatchConfig(BaseModel):
    """Directories to watch and path prefixes to leave out of the scan."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    directories: list[str] = Field(min_length=1)
    excludes: list[str] = Field(default_factory=list)


class Thresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    critical: int = Field(ge=0)
    warning: int = Field(ge=0)


class CheckOptions(BaseModel):
    """Parsed command-line options for a single check run."""

    model_config = ConfigDict(frozen=True)

    config_path: str
    thresholds: Thresholds
    state_dir: Path = DEFAULT_STATE_DIR
    log_file: Path | None = None
