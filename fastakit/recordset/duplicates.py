"""Duplicate detection by identifier and by sequence content."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..io.fasta import SequenceRecord

DUPLICATE_TYPES = ("id", "sequence", "both")
PREVIEW_LENGTH = 50

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, slots=True)
class IndexedRecord:
    record: SequenceRecord
    index: int


@dataclass(slots=True)
class DuplicateGroup:
    kind: str
    key: str
    members: List[IndexedRecord]

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def indices(self) -> List[int]:
        return [member.index for member in self.members]

    @property
    def preview(self) -> str:
        if len(self.key) > PREVIEW_LENGTH:
            return self.key[:PREVIEW_LENGTH] + "..."
        return self.key


@dataclass(slots=True)
class DuplicateReport:
    duplicate_type: str
    case_sensitive: bool
    id_groups: List[DuplicateGroup] = field(default_factory=list)
    sequence_groups: List[DuplicateGroup] = field(default_factory=list)
    duplicate_indices: List[int] = field(default_factory=list)
    unique: List[SequenceRecord] = field(default_factory=list)

    @property
    def groups(self) -> List[DuplicateGroup]:
        if self.duplicate_type == "id":
            return self.id_groups
        if self.duplicate_type == "sequence":
            return self.sequence_groups
        return [*self.id_groups, *self.sequence_groups]


def check_duplicate_type(duplicate_type: str) -> str:
    if duplicate_type not in DUPLICATE_TYPES:
        raise ValueError(
            f"Unsupported duplicate type: {duplicate_type} (expected one of {', '.join(DUPLICATE_TYPES)})"
        )
    return duplicate_type


def sequence_key(sequence: str, case_sensitive: bool) -> str:
    cleaned = _WHITESPACE.sub("", sequence)
    return cleaned if case_sensitive else cleaned.upper()


def _group(records: Sequence[SequenceRecord], kind: str, case_sensitive: bool) -> List[DuplicateGroup]:
    buckets: Dict[str, List[IndexedRecord]] = {}
    for index, record in enumerate(records):
        key = record.id if kind == "id" else sequence_key(record.sequence, case_sensitive)
        buckets.setdefault(key, []).append(IndexedRecord(record, index))
    return [DuplicateGroup(kind, key, members) for key, members in buckets.items() if len(members) > 1]


def find_duplicates(
    records: Sequence[SequenceRecord],
    duplicate_type: str = "both",
    case_sensitive: bool = False,
) -> DuplicateReport:
    """Group duplicates and rebuild a unique record set.

    Both groupings are always computed; the mode picks which are reported.
    The unique set holds every record outside a reported group, then the
    first member of each reported id group, then the first member of each
    reported sequence group whose id is not already present.
    """
    check_duplicate_type(duplicate_type)
    report = DuplicateReport(duplicate_type=duplicate_type, case_sensitive=case_sensitive)
    report.id_groups = _group(records, "id", case_sensitive)
    report.sequence_groups = _group(records, "sequence", case_sensitive)

    flagged = {index for group in report.groups for index in group.indices}
    report.duplicate_indices = sorted(flagged)

    unique = [record for index, record in enumerate(records) if index not in flagged]
    for group in report.groups:
        first = group.members[0].record
        if group.kind == "id":
            unique.append(first)
            continue
        if not any(existing.id == first.id for existing in unique):
            unique.append(first)
    report.unique = unique
    return report
