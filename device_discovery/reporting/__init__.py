"""Reporting module - discovery result output."""

from .json_reporter import JsonReporter
from .table_reporter import TableReporter, format_address

__all__ = [
    "JsonReporter",
    "TableReporter",
    "format_address",
]
