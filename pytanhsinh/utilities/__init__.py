"""General functionality."""

from .basics import (
    parallel, output, warn, format_seconds, format_number, format_options, format_table, validate_interval,
    StringRepresentation, Error
)
