"""Utility helpers for interacting with the filesystem."""

from __future__ import annotations

from pathlib import Path

FASTA_SUFFIXES = (".fasta", ".fa", ".fna", ".ffn", ".faa", ".fas")


def ensure_dir(path: Path) -> Path:
    """Create the directory if it does not exist and return it."""

    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text(path: Path, text: str) -> None:
    """Write plain text content to disk."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def file_stem(path: str | Path) -> str:
    """Return the last path segment with a FASTA extension removed."""

    name = Path(path).name
    lowered = name.lower()
    for suffix in FASTA_SUFFIXES:
        if lowered.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name or "unknown"


def require_input(path: Path) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path
