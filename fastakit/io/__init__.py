"""IO helpers for fastakit."""

from .fasta import (
    SequenceRecord,
    format_fasta,
    format_record,
    parse_fasta,
    read_fasta,
    wrap_sequence,
    write_fasta,
)
from .paths import ensure_dir, file_stem, require_input, write_text
from .tables import write_table

__all__ = [
    "SequenceRecord",
    "parse_fasta",
    "format_fasta",
    "format_record",
    "wrap_sequence",
    "read_fasta",
    "write_fasta",
    "ensure_dir",
    "file_stem",
    "require_input",
    "write_text",
    "write_table",
]
