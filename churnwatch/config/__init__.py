from .loader import EXAMPLE_CONFIG_TEMPLATE, load_watch_config
from .models import CheckOptions, Thresholds, WatchConfig

__all__ = [
    "CheckOptions",
    "EXAMPLE_CONFIG_TEMPLATE",
    "Thresholds",
    "WatchConfig",
    "load_watch_config",
]
