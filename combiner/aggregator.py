"""
Batch aggregation.

Folds an ordered list of tables into one combined record list and a summary
per file, then runs duplicate detection over the result. Tables are handled
strictly one after another so record order and file summaries follow the
input order.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from loguru import logger

from combiner.config import IDENTITY_FIELD, TARGET_FIELDS
from combiner.deduplication import DuplicateGroup, find_duplicates, has_identity_values
from combiner.errors import BatchAbortedError
from combiner.normalizers import NormalizedRecord, extract_record, filter_rows, resolve_columns
from combiner.parsers import ParsedTable, ParseIssue


@dataclass(frozen=True)
class FileSummary:
    """Per-file statistics, computed from the raw table before and after filtering."""
    file_name: str
    file_index: int
    total_row_count: int
    user_row_count: int
    has_type_field: bool
    available_fields: list[str]
    missing_fields: list[str]
    columns: list[str]
    warnings: list[ParseIssue] = field(default_factory=list)

    @property
    def filtered_out_count(self) -> int:
        return self.total_row_count - self.user_row_count


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counts for one completed run."""
    total_records: int
    total_files: int
    total_original_records: int
    has_name_field: bool
    duplicate_count: int
    duplicate_groups: int
    file_details: list[FileSummary] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BatchResult:
    """Everything a run hands to the presentation layer."""
    records: list[NormalizedRecord]
    duplicate_groups: list[DuplicateGroup]
    summary: RunSummary


@dataclass(frozen=True)
class BatchAccumulator:
    """Append-only state threaded through the fold over a batch."""
    records: tuple[NormalizedRecord, ...] = ()
    file_summaries: tuple[FileSummary, ...] = ()

    def add_table(self, table: ParsedTable, file_index: int) -> "BatchAccumulator":
        """Filter and extract one table, returning the extended accumulator."""
        columns = table.columns or (list(table.rows[0].keys()) if table.rows else [])

        filtered = filter_rows(table.rows, columns)
        column_map = resolve_columns(columns, TARGET_FIELDS)
        extracted = tuple(
            extract_record(row, column_map, table.name, file_index)
            for row in filtered.rows
        )

        if not filtered.has_type_field:
            logger.info(f'{table.name}: no "Type" column, keeping all {len(extracted)} rows')
        for issue in table.issues:
            logger.warning(f"{table.name}: line {issue.row}: {issue.code}: {issue.message}")

        summary = FileSummary(
            file_name=table.name,
            file_index=file_index,
            total_row_count=len(table.rows),
            user_row_count=len(extracted),
            has_type_field=filtered.has_type_field,
            available_fields=column_map.found_fields,
            missing_fields=column_map.missing_fields,
            columns=list(columns),
            warnings=list(table.issues),
        )
        logger.info(
            f"{table.name}: kept {summary.user_row_count} of {summary.total_row_count} rows"
        )

        return BatchAccumulator(
            records=self.records + extracted,
            file_summaries=self.file_summaries + (summary,),
        )

    def finish(self, identity_field: str = IDENTITY_FIELD) -> BatchResult:
        """Run duplicate detection and build the RunSummary."""
        records = list(self.records)
        groups = find_duplicates(records, identity_field)

        summary = RunSummary(
            total_records=len(records),
            total_files=len(self.file_summaries),
            total_original_records=sum(f.total_row_count for f in self.file_summaries),
            has_name_field=has_identity_values(records, identity_field),
            duplicate_count=sum(len(g) for g in groups),
            duplicate_groups=len(groups),
            file_details=list(self.file_summaries),
        )
        return BatchResult(records=records, duplicate_groups=groups, summary=summary)


def _source_label(source: Any) -> str:
    return getattr(source, "name", None) or str(source)


def process_sources(
    sources: Iterable[Any],
    parser: Callable[[Any], ParsedTable],
    identity_field: str = IDENTITY_FIELD,
) -> BatchResult:
    """
    Parse and fold sources one at a time, in order.

    Args:
        sources: File paths (or anything the parser accepts), in user order
        parser: Callable returning a ParsedTable for one source
        identity_field: Field used for duplicate detection

    Returns:
        BatchResult for the whole batch

    Raises:
        BatchAbortedError: If a source fails fatally; carries the records
            accumulated from the sources before it
    """
    acc = BatchAccumulator()

    for index, source in enumerate(sources):
        label = _source_label(source)
        try:
            table = parser(source)
            acc = acc.add_table(table, index)
        except Exception as e:
            logger.error(f"Processing failed at {label}: {e}")
            raise BatchAbortedError(label, index, acc.records) from e

    result = acc.finish(identity_field)
    logger.info(
        f"Processed {result.summary.total_files} files: "
        f"{result.summary.total_records} of {result.summary.total_original_records} records kept"
    )
    return result


def process_batch(
    tables: Sequence[ParsedTable],
    identity_field: str = IDENTITY_FIELD,
) -> BatchResult:
    """Run the pipeline over already-parsed tables."""
    return process_sources(tables, lambda table: table, identity_field)
