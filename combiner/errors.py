"""
Exceptions raised by the combiner.

Row and field level problems never raise: they degrade to empty values or are
recorded as ParseIssue warnings. Only a file that yields no usable data at all
escalates, and that aborts the whole batch.
"""


class CombinerError(Exception):
    """Base class for combiner errors."""


class TableParseError(CombinerError):
    """No usable data could be obtained from a source file."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class BatchAbortedError(CombinerError):
    """
    A table failed fatally while processing a batch.

    Attributes:
        source: Label of the file that failed
        file_index: Position of that file in the batch
        partial_records: Records accumulated from the files before it
    """

    def __init__(self, source: str, file_index: int, partial_records=()):
        self.source = source
        self.file_index = file_index
        self.partial_records = tuple(partial_records)
        super().__init__(f"Batch aborted at file {file_index} ({source})")
