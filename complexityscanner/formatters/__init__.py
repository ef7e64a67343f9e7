"""
Output formatters for analysis results.

- table: human-readable listing
- json: machine-readable dump of the full result
"""

from complexityscanner.core.errors import InvalidArgumentError
from complexityscanner.formatters.json_formatter import JSONFormatter
from complexityscanner.formatters.table import TableFormatter

__all__ = [
    "JSONFormatter",
    "TableFormatter",
    "get_formatter",
]


FORMATTERS = {
    "table": TableFormatter,
    "json": JSONFormatter,
}


def get_formatter(format_name: str, **options):
    """Get a formatter by name."""
    formatter_class = FORMATTERS.get(format_name.lower())
    if formatter_class:
        return formatter_class(**options)

    raise InvalidArgumentError(
        f"Unknown output format: {format_name}",
        details={"expected": ", ".join(FORMATTERS)},
    )
