"""Length-range filtering."""

from __future__ import annotations

from typing import Iterable, List

from ..io.fasta import SequenceRecord


def filter_by_length(records: Iterable[SequenceRecord], min_length: int, max_length: int) -> List[SequenceRecord]:
    """Keep records whose sequence length lies in ``[min_length, max_length]``."""
    return [record for record in records if min_length <= len(record.sequence) <= max_length]
