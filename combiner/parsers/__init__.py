"""
Table parsers.

A parser turns the raw content of one file into a ParsedTable (ordered rows
plus the column list) for the rest of the pipeline.
"""

from .csv_table import ParsedTable, ParseIssue, coerce_cell, parse_csv_table, read_csv_file

__all__ = [
    'ParsedTable',
    'ParseIssue',
    'coerce_cell',
    'parse_csv_table',
    'read_csv_file',
]
