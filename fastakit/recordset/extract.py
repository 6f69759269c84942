"""Coordinate-based subsequence extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..io.fasta import SequenceRecord

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, slots=True)
class Coordinate:
    sequence_id: str
    start: int
    end: int
    name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Coordinate":
        sequence_id = data.get("sequence_id", data.get("sequenceId"))
        if sequence_id is None or "start" not in data or "end" not in data:
            raise ValueError(f"Coordinate requires sequence_id, start and end: {dict(data)}")
        name = data.get("name")
        return cls(
            sequence_id=str(sequence_id),
            start=int(data["start"]),
            end=int(data["end"]),
            name=str(name) if name else None,
        )

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class Extraction:
    record: SequenceRecord
    source_sequence: str
    start: int
    end: int
    original_length: int


@dataclass(frozen=True, slots=True)
class ExtractionError:
    sequence_id: str
    error: str
    coordinates: Optional[str] = None
    sequence_length: Optional[int] = None


def _index_by_id(records: Iterable[SequenceRecord]) -> Dict[str, SequenceRecord]:
    lookup: Dict[str, SequenceRecord] = {}
    for record in records:
        lookup[record.id] = record
    return lookup


def _check(coord: Coordinate, length: int) -> Optional[ExtractionError]:
    if coord.start < 1 or coord.end < 1:
        return ExtractionError(coord.sequence_id, "Coordinates must be 1-indexed (start from 1)", coord.label)
    if coord.start > length or coord.end > length:
        return ExtractionError(coord.sequence_id, "Coordinates exceed sequence length", coord.label, length)
    if coord.start > coord.end:
        return ExtractionError(
            coord.sequence_id, "Start coordinate must be less than or equal to end coordinate", coord.label
        )
    return None


def extract_subsequences(
    records: Sequence[SequenceRecord],
    coordinates: Iterable[Union[Coordinate, Mapping[str, object]]],
) -> Tuple[List[Extraction], List[ExtractionError]]:
    """Extract inclusive 1-indexed ranges; failures are collected, not raised."""
    lookup = _index_by_id(records)
    extracted: List[Extraction] = []
    errors: List[ExtractionError] = []

    for item in coordinates:
        coord = item if isinstance(item, Coordinate) else Coordinate.from_mapping(item)
        source = lookup.get(coord.sequence_id)
        if source is None:
            errors.append(ExtractionError(coord.sequence_id, "Sequence not found"))
            continue

        sequence = _WHITESPACE.sub("", source.sequence)
        problem = _check(coord, len(sequence))
        if problem is not None:
            errors.append(problem)
            continue

        record = SequenceRecord(
            id=coord.name or f"{coord.sequence_id}_{coord.label}",
            description=f"extracted from {coord.sequence_id} ({coord.label}) | {source.description}",
            sequence=sequence[coord.start - 1 : coord.end],
        )
        extracted.append(Extraction(record, coord.sequence_id, coord.start, coord.end, len(sequence)))

    return extracted, errors
