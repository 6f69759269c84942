"""FASTA record model, lenient parser and line-wrapped writer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import LINE_WIDTH

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class SequenceRecord:
    id: str
    description: str
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)


def parse_fasta(text: str) -> List[SequenceRecord]:
    """Parse FASTA text into records, in file order.

    Parsing is lenient: text before the first header is ignored, headers
    without sequence lines yield empty sequences and duplicate ids are kept.
    """
    records: List[SequenceRecord] = []
    header: Optional[str] = None
    seq_parts: List[str] = []

    def flush_record() -> None:
        if header is None:
            return
        identifier, description = _split_header(header)
        records.append(SequenceRecord(id=identifier, description=description, sequence="".join(seq_parts)))

    for line in _LINE_SPLIT.split(text):
        if line.startswith(">"):
            flush_record()
            header = line[1:]
            seq_parts = []
        elif header is not None:
            seq_parts.append(line.strip())

    flush_record()
    return records


def _split_header(header: str) -> tuple[str, str]:
    parts = header.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def wrap_sequence(sequence: str, width: int = LINE_WIDTH) -> List[str]:
    """Split a sequence into lines of at most ``width`` residues."""
    return [sequence[idx : idx + width] for idx in range(0, len(sequence), width)]


def format_record(record: SequenceRecord, width: int = LINE_WIDTH) -> str:
    header = f">{record.id} {record.description}" if record.description else f">{record.id}"
    return "\n".join([header, *wrap_sequence(record.sequence, width)])


def format_fasta(records: Iterable[SequenceRecord], width: int = LINE_WIDTH) -> str:
    """Render records as FASTA text terminated by a newline."""
    blocks = [format_record(record, width) for record in records]
    if not blocks:
        return ""
    return "\n".join(blocks) + "\n"


def read_fasta(path: Path) -> List[SequenceRecord]:
    """Read a FASTA file into a list of SequenceRecords."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return parse_fasta(path.read_text(encoding="utf-8"))


def write_fasta(path: Path, records: Iterable[SequenceRecord]) -> Path:
    """Write records to ``path`` as FASTA, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_fasta(records), encoding="utf-8")
    return path
