"""
Exact-match duplicate detection on the identity field.

Records are grouped by their normalized identity value (trimmed, lowercased).
Groups keep first-seen key order and original record order, so the same input
always produces the same output. Blank identities never form a group.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from combiner.config import IDENTITY_FIELD, ORIGINAL_INDEX_KEY
from combiner.normalizers.records import NormalizedRecord
from combiner.utils.text import normalize_identity, to_text


@dataclass(frozen=True)
class DuplicateMember:
    """A record inside a duplicate group, with its position in the combined list."""
    record: NormalizedRecord
    original_index: int

    def as_dict(self) -> dict:
        data = self.record.as_dict()
        data[ORIGINAL_INDEX_KEY] = self.original_index
        return data


@dataclass
class DuplicateGroup:
    """Two or more records sharing a normalized identity key."""
    key: str
    representative: object          # first member's unnormalized identity value
    members: list[DuplicateMember] = field(default_factory=list)
    strategy: str = IDENTITY_FIELD

    def __len__(self) -> int:
        return len(self.members)

    @property
    def display_name(self) -> str:
        return to_text(self.representative) or self.key

    @property
    def records(self) -> list[NormalizedRecord]:
        return [m.record for m in self.members]


def has_identity_values(records: Sequence[NormalizedRecord], identity_field: str = IDENTITY_FIELD) -> bool:
    """True when at least one record has a non-empty identity value."""
    return any(to_text(r.get(identity_field, "")) != "" for r in records)


def find_duplicates(
    records: Sequence[NormalizedRecord],
    identity_field: str = IDENTITY_FIELD,
) -> list[DuplicateGroup]:
    """
    Group records by normalized identity and return groups of size >= 2.

    Args:
        records: Combined records in batch order
        identity_field: Identity field to match on

    Returns:
        Duplicate groups in first-seen order; empty when no record carries
        the identity field
    """
    if not has_identity_values(records, identity_field):
        logger.warning(f'No "{identity_field}" values found - duplicate detection disabled')
        return []

    buckets: dict[str, list[DuplicateMember]] = {}
    for index, record in enumerate(records):
        key = normalize_identity(record.get(identity_field, ""))
        if not key:
            continue
        buckets.setdefault(key, []).append(DuplicateMember(record, index))

    groups = [
        DuplicateGroup(
            key=key,
            representative=members[0].record.get(identity_field),
            members=members,
            strategy=identity_field,
        )
        for key, members in buckets.items()
        if len(members) > 1
    ]

    logger.info(
        f"Found {len(groups)} duplicate groups "
        f"({sum(len(g) for g in groups)} records) by {identity_field}"
    )
    return groups
