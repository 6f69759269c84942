"""Tests for reverse complement."""

from __future__ import annotations

from fastakit.analysis.complement import NUCLEOTIDE_COMPLEMENT, reverse_complement


def test_palindrome() -> None:
    assert reverse_complement("GAATTC") == "GAATTC"


def test_case_and_gaps_preserved() -> None:
    assert reverse_complement("aCgT-N") == "N-AcGt"


def test_unknown_residues_become_n() -> None:
    assert reverse_complement("AXR") == "NNT"


def test_involution() -> None:
    sequence = "ATCGatcgGGCCaatt"
    assert reverse_complement(reverse_complement(sequence)) == sequence


def test_nucleotide_table_is_upper_case_only() -> None:
    assert reverse_complement("acgt", NUCLEOTIDE_COMPLEMENT) == "NNNN"
    assert reverse_complement("ACGTN", NUCLEOTIDE_COMPLEMENT) == "NACGT"
