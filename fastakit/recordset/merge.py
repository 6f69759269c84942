"""Multi-file merge with optional id prefixing and de-duplication."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Optional, Set

from ..io.fasta import SequenceRecord, read_fasta
from ..io.paths import file_stem
from ..logging_utils import get_logger


@dataclass(slots=True)
class MergeFileStats:
    file: str
    original_count: int = 0
    added_count: int = 0
    duplicate_count: int = 0
    error: Optional[str] = None


@dataclass(slots=True)
class MergeResult:
    records: List[SequenceRecord] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    files: List[MergeFileStats] = field(default_factory=list)

    @property
    def duplicates_removed(self) -> int:
        return sum(stats.duplicate_count for stats in self.files)

    @property
    def failed_files(self) -> List[MergeFileStats]:
        return [stats for stats in self.files if stats.error is not None]


def merge_sources(
    input_paths: Iterable[str | Path],
    remove_duplicates: bool = False,
    add_file_prefix: bool = False,
    logger=None,
) -> MergeResult:
    """Concatenate records from several FASTA files in input order.

    An unreadable file is recorded in its stats entry and skipped.
    """
    logger = logger or get_logger("merge")
    result = MergeResult()
    seen_ids: Set[str] = set()

    for input_path in input_paths:
        stats = MergeFileStats(file=str(input_path))
        result.files.append(stats)
        try:
            records = read_fasta(Path(input_path))
        except (OSError, UnicodeDecodeError) as exc:
            stats.error = f"Failed to read file: {exc}"
            logger.warning("Skipping %s: %s", input_path, exc)
            continue

        stem = file_stem(input_path)
        stats.original_count = len(records)
        for record in records:
            if add_file_prefix:
                record = replace(record, id=f"{stem}_{record.id}")
            if remove_duplicates:
                if record.id in seen_ids:
                    stats.duplicate_count += 1
                    continue
                seen_ids.add(record.id)
            result.records.append(record)
            result.sources.append(str(input_path))
            stats.added_count += 1

    return result
