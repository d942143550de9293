"""Utility modules."""
from examgate.utils.json_utils import (
    json_dump,
    json_load,
    json_load_object,
    json_pretty,
)
from examgate.utils.time_utils import format_timestamp, utc_now

__all__ = [
    "json_dump",
    "json_load",
    "json_load_object",
    "json_pretty",
    "format_timestamp",
    "utc_now",
]
