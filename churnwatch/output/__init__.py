from .reporter import FIRST_RUN_TEMPLATE, UNKNOWN_TEMPLATE, Reporter, format_message

__all__ = [
    "FIRST_RUN_TEMPLATE",
    "Reporter",
    "UNKNOWN_TEMPLATE",
    "format_message",
]
