# foodregistry/utils/__init__.py
# Makes 'utils' a package. Exports utility functions/classes.

from .logger import logger
from .product_filter import filter_products, matches_search
from .data_conversion import safe_int, clean_text, to_utc_isoformat
from .system_monitor import log_system_resources, start_resource_monitor, stop_resource_monitor

__all__ = [
    "logger",
    "filter_products",
    "matches_search",
    "safe_int",
    "clean_text",
    "to_utc_isoformat",
    "log_system_resources",
    "start_resource_monitor",
    "stop_resource_monitor",
]
