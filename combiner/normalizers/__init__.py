"""
Record normalization.

These modules reduce arbitrary directory-export rows to the fixed target
field set and filter them down to the record kind we care about.
"""

from .kind import KindFilterResult, filter_rows, find_kind_column, is_target_kind
from .records import ColumnMap, NormalizedRecord, extract_record, resolve_columns

__all__ = [
    'ColumnMap',
    'NormalizedRecord',
    'resolve_columns',
    'extract_record',
    'KindFilterResult',
    'find_kind_column',
    'is_target_kind',
    'filter_rows',
]
