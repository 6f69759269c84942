"""Partitioning of a record collection into output chunks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from ..config import SPLIT_DEFAULTS
from ..io.fasta import SequenceRecord, format_record

SPLIT_METHODS = ("count", "size", "individual")
BYTES_PER_MB = 1024 * 1024

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(slots=True)
class SplitChunk:
    name: str
    records: List[SequenceRecord]


def check_split_method(method: str) -> str:
    if method not in SPLIT_METHODS:
        raise ValueError(f"Unknown split method: {method} (expected one of {', '.join(SPLIT_METHODS)})")
    return method


def record_size(record: SequenceRecord) -> int:
    """Byte length of the record as written to a split file."""
    return len((format_record(record) + "\n").encode("utf-8"))


def safe_name(name: str) -> str:
    return _UNSAFE_NAME.sub("_", name)


def split_records(
    records: Sequence[SequenceRecord],
    method: str,
    value: Optional[float] = None,
) -> List[SplitChunk]:
    check_split_method(method)
    if method == "individual":
        return _split_individual(records)
    if method == "count":
        per_chunk = int(value) if value else SPLIT_DEFAULTS.count
        if per_chunk < 1:
            raise ValueError(f"Sequences per file must be positive, got {value}")
        return [
            SplitChunk(f"part{number}", list(records[start : start + per_chunk]))
            for number, start in enumerate(range(0, len(records), per_chunk), start=1)
        ]
    return _split_by_size(records, (value or SPLIT_DEFAULTS.size_mb) * BYTES_PER_MB)


def _split_by_size(records: Sequence[SequenceRecord], max_bytes: float) -> List[SplitChunk]:
    chunks: List[SplitChunk] = []
    current: List[SequenceRecord] = []
    current_size = 0
    for record in records:
        size = record_size(record)
        # a chunk always takes at least one record
        if current and current_size + size > max_bytes:
            chunks.append(SplitChunk(f"part{len(chunks) + 1}", current))
            current = []
            current_size = 0
        current.append(record)
        current_size += size
    if current:
        chunks.append(SplitChunk(f"part{len(chunks) + 1}", current))
    return chunks


def _split_individual(records: Sequence[SequenceRecord]) -> List[SplitChunk]:
    chunks: List[SplitChunk] = []
    used: Set[str] = set()
    for index, record in enumerate(records):
        base = safe_name(record.id) or str(index + 1)
        name = base
        suffix = 1
        # generated names may collide with later ids, so check every candidate
        while name in used:
            suffix += 1
            name = f"{base}_{suffix}"
        used.add(name)
        chunks.append(SplitChunk(name, [record]))
    return chunks
