"""Tests for nucleotide composition statistics."""

from __future__ import annotations

import pytest

from fastakit.analysis.composition import nucleotide_stats, overall_stats, sliding_window_gc


def test_counts_and_percentages() -> None:
    stats = nucleotide_stats("ggccAATTNN")
    assert stats.length == 10
    assert stats.counts == {"A": 2, "T": 2, "G": 2, "C": 2, "N": 2}
    assert stats.known_bases == 8
    assert stats.gc_content == 50.0
    assert stats.at_content == 50.0
    assert stats.n_content == 20.0
    assert stats.sliding_window is None


def test_no_known_bases() -> None:
    stats = nucleotide_stats("NNNN")
    assert stats.gc_content == 0.0
    assert stats.at_content == 0.0
    assert stats.n_content == 100.0


def test_bounds_hold() -> None:
    for sequence in ("GCGCGT", "AAAA", "ACGTRYN", "", "gc at\nNN"):
        stats = nucleotide_stats(sequence)
        assert 0 <= stats.gc_content <= 100
        assert stats.gc_content + stats.at_content <= 100.0 + 1e-9


def test_sliding_window() -> None:
    stats = nucleotide_stats("GGAA", window_size=2)
    assert stats.sliding_window == [
        {"position": 1, "gc_content": 100.0},
        {"position": 2, "gc_content": 50.0},
        {"position": 3, "gc_content": 0.0},
    ]
    window = stats.sliding_window_stats
    assert window.number_of_windows == 3
    assert window.mean_gc == 50.0
    assert window.min_gc == 0.0
    assert window.max_gc == 100.0
    assert window.std_dev_gc == pytest.approx(40.82)


def test_window_not_smaller_than_sequence_is_skipped() -> None:
    assert nucleotide_stats("GGAA", window_size=4).sliding_window is None
    assert nucleotide_stats("GGAA", window_size=0).sliding_window is None
    assert sliding_window_gc("GGAA", 10) == []


def test_overall_stats() -> None:
    per_record = [nucleotide_stats("GGCC"), nucleotide_stats("AATT"), nucleotide_stats("GCAT")]
    overall = overall_stats(per_record)
    assert overall.total_sequences == 3
    assert overall.mean_gc == 50.0
    assert overall.min_gc == 0.0
    assert overall.max_gc == 100.0
    assert overall.total_length == 12


def test_overall_stats_empty() -> None:
    overall = overall_stats([])
    assert overall.total_sequences == 0
    assert overall.mean_gc == 0.0
    assert overall.total_length == 0
