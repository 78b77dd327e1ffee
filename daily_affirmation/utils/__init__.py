"""Utils module."""

from .dates import (
    calendar_day,
    is_same_day,
    format_timestamp,
    parse_timestamp,
    format_time_of_day,
    parse_time_of_day,
)
from .logger import setup_logger

__all__ = [
    'calendar_day',
    'is_same_day',
    'format_timestamp',
    'parse_timestamp',
    'format_time_of_day',
    'parse_time_of_day',
    'setup_logger',
]
