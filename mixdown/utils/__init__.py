"""
Utility module for Mixdown.

Contains helper functions for human-readable log output.
"""

from .formatting import (
    format_time,
    format_db,
    format_peak,
    format_sample_rate,
    format_channels,
    format_format,
    samples_to_time_str,
)

__all__ = [
    "format_time",
    "format_db",
    "format_peak",
    "format_sample_rate",
    "format_channels",
    "format_format",
    "samples_to_time_str",
]
