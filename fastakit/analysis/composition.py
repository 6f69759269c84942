"""Nucleotide composition and GC-content statistics."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

_WHITESPACE = re.compile(r"\s")
COUNTED_BASES = ("A", "T", "G", "C", "N")


@dataclass(slots=True)
class WindowStats:
    window_size: int
    number_of_windows: int
    mean_gc: float
    min_gc: float
    max_gc: float
    std_dev_gc: float


@dataclass(slots=True)
class NucleotideStats:
    length: int
    counts: Dict[str, int]
    gc_content: float
    at_content: float
    n_content: float
    known_bases: int
    sliding_window: Optional[List[Dict[str, float]]] = None
    sliding_window_stats: Optional[WindowStats] = None


@dataclass(slots=True)
class OverallStats:
    total_sequences: int
    mean_gc: float
    min_gc: float
    max_gc: float
    total_length: int


def clean_sequence(sequence: str) -> str:
    return _WHITESPACE.sub("", sequence).upper()


def nucleotide_stats(sequence: str, window_size: Optional[int] = None) -> NucleotideStats:
    """Count bases and compute GC/AT/N percentages for one sequence.

    Percentages of GC and AT are relative to unambiguous bases only; N is
    relative to the full stripped length. A sliding window is added when
    ``0 < window_size < length``.
    """
    cleaned = clean_sequence(sequence)
    stats = _base_stats(cleaned)
    if window_size and 0 < window_size < stats.length:
        windows = _windows(cleaned, window_size)
        stats.sliding_window = windows
        stats.sliding_window_stats = _summarize_windows([w["gc_content"] for w in windows], window_size)
    return stats


def sliding_window_gc(sequence: str, window_size: int) -> List[Dict[str, float]]:
    """GC% of every window of ``window_size`` residues, 1-indexed by start."""
    cleaned = clean_sequence(sequence)
    if window_size <= 0 or window_size >= len(cleaned):
        return []
    return _windows(cleaned, window_size)


def overall_stats(per_record: Sequence[NucleotideStats]) -> OverallStats:
    if not per_record:
        return OverallStats(0, 0.0, 0.0, 0.0, 0)
    gc_values = [stats.gc_content for stats in per_record]
    return OverallStats(
        total_sequences=len(per_record),
        mean_gc=round(sum(gc_values) / len(gc_values), 2),
        min_gc=min(gc_values),
        max_gc=max(gc_values),
        total_length=sum(stats.length for stats in per_record),
    )


def _base_stats(cleaned: str) -> NucleotideStats:
    length = len(cleaned)
    counts = {base: cleaned.count(base) for base in COUNTED_BASES}
    gc_count = counts["G"] + counts["C"]
    at_count = counts["A"] + counts["T"]
    known = gc_count + at_count
    return NucleotideStats(
        length=length,
        counts=counts,
        gc_content=round(gc_count / known * 100, 2) if known else 0.0,
        at_content=round(at_count / known * 100, 2) if known else 0.0,
        n_content=round(counts["N"] / length * 100, 2) if length else 0.0,
        known_bases=known,
    )


def _windows(cleaned: str, window_size: int) -> List[Dict[str, float]]:
    return [
        {"position": idx + 1, "gc_content": _base_stats(cleaned[idx : idx + window_size]).gc_content}
        for idx in range(len(cleaned) - window_size + 1)
    ]


def _summarize_windows(values: List[float], window_size: int) -> WindowStats:
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return WindowStats(
        window_size=window_size,
        number_of_windows=len(values),
        mean_gc=round(mean, 2),
        min_gc=min(values),
        max_gc=max(values),
        std_dev_gc=round(math.sqrt(variance), 2),
    )
