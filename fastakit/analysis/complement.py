"""Reverse-complement tables and helper."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Case-preserving table; gaps are kept literally.
COMPLEMENT: Mapping[str, str] = MappingProxyType(
    {
        "A": "T", "T": "A", "C": "G", "G": "C",
        "a": "t", "t": "a", "c": "g", "g": "c",
        "N": "N", "n": "n", "-": "-",
    }
)

# Upper-case nucleotide table used where sequences are normalized first.
NUCLEOTIDE_COMPLEMENT: Mapping[str, str] = MappingProxyType(
    {"A": "T", "T": "A", "C": "G", "G": "C", "N": "N"}
)


def reverse_complement(sequence: str, table: Mapping[str, str] = COMPLEMENT, fallback: str = "N") -> str:
    """Reverse ``sequence`` and complement each residue through ``table``.

    Residues missing from the table become ``fallback``.
    """
    return "".join(table.get(base, fallback) for base in reversed(sequence))
