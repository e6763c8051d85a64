"""
Record extraction.

Maps a parsed row onto the fixed target field set. Column names are matched
case-insensitively once per table (resolve_columns), then every row is
extracted through the resulting ColumnMap.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from combiner.config import FILE_INDEX_KEY, SOURCE_FILE_KEY, TARGET_FIELDS
from combiner.utils.text import normalize_column_name


@dataclass(frozen=True)
class ColumnMap:
    """Target field -> raw column name (None when the table lacks it)."""
    columns: dict[str, str | None]
    target_fields: tuple[str, ...] = TARGET_FIELDS

    @property
    def found_fields(self) -> list[str]:
        return [f for f in self.target_fields if self.columns.get(f) is not None]

    @property
    def missing_fields(self) -> list[str]:
        return [f for f in self.target_fields if self.columns.get(f) is None]


@dataclass(frozen=True)
class NormalizedRecord:
    """
    A retained row reduced to the target fields, plus provenance.

    values holds exactly the target fields; a field whose column was absent
    from the source table is an empty string.
    """
    values: Mapping[str, Any]
    source_file: str
    file_index: int

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, field: str) -> Any:
        return self.values[field]

    def get(self, field: str, default: Any = None) -> Any:
        return self.values.get(field, default)

    def as_row(self) -> dict[str, Any]:
        """Target fields only, usable as a raw row."""
        return dict(self.values)

    def as_dict(self) -> dict[str, Any]:
        """Target fields followed by the provenance keys."""
        data = dict(self.values)
        data[SOURCE_FILE_KEY] = self.source_file
        data[FILE_INDEX_KEY] = self.file_index
        return data


def resolve_columns(
    columns: Iterable[str],
    target_fields: tuple[str, ...] = TARGET_FIELDS,
) -> ColumnMap:
    """Match target fields to raw columns; the first matching column wins.

    Args:
        columns: Raw column names in table order
        target_fields: Logical fields to look for

    Returns:
        ColumnMap for the table
    """
    by_key: dict[str, str] = {}
    for column in columns:
        by_key.setdefault(normalize_column_name(column), column)

    return ColumnMap(
        columns={f: by_key.get(normalize_column_name(f)) for f in target_fields},
        target_fields=tuple(target_fields),
    )


def extract_record(
    row: Mapping[str, Any],
    column_map: ColumnMap,
    source_file: str,
    file_index: int,
) -> NormalizedRecord:
    """Build a NormalizedRecord from one raw row."""
    values = {}
    for target in column_map.target_fields:
        column = column_map.columns.get(target)
        values[target] = row.get(column, "") if column is not None else ""

    return NormalizedRecord(values=values, source_file=source_file, file_index=file_index)
