"""
User directory combiner.

Combines tabular user-directory exports into one normalized record list and
detects duplicate entries by Name.
"""

from combiner.aggregator import (
    BatchAccumulator,
    BatchResult,
    FileSummary,
    RunSummary,
    process_batch,
    process_sources,
)
from combiner.deduplication import DuplicateGroup, find_duplicates
from combiner.errors import BatchAbortedError, CombinerError, TableParseError
from combiner.exporters import duplicates_to_csv, records_to_csv, write_exports
from combiner.normalizers import NormalizedRecord
from combiner.parsers import ParsedTable, parse_csv_table, read_csv_file

__all__ = [
    "BatchAccumulator",
    "BatchResult",
    "FileSummary",
    "RunSummary",
    "process_batch",
    "process_sources",
    "DuplicateGroup",
    "find_duplicates",
    "BatchAbortedError",
    "CombinerError",
    "TableParseError",
    "records_to_csv",
    "duplicates_to_csv",
    "write_exports",
    "NormalizedRecord",
    "ParsedTable",
    "parse_csv_table",
    "read_csv_file",
]
